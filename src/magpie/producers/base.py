"""Base producer class with delivery channel helpers."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timezone

from ..channel import DeliveryChannel
from ..schemas import Message

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class BaseProducer(ABC):
    """Base class for all data source producers.

    A producer computes or fetches its value on every tick and sends the
    resulting messages, in order, onto the shared delivery channel. Errors
    are not caught here; they end the producer and, through the supervisor,
    the whole process.
    """

    name: str = "producer"

    def __init__(
        self,
        channel: DeliveryChannel,
        interval_seconds: float,
        clock: Clock = utc_now,
        logger: logging.Logger | None = None,
    ) -> None:
        self.channel = channel
        self.interval_seconds = interval_seconds
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    async def produce(self) -> list[Message]:
        """Compute this tick's messages."""

    async def run_once(self) -> int:
        """Produce one tick of messages and send them to the channel.

        Returns:
            Number of messages sent.
        """
        messages = await self.produce()
        for message in messages:
            await self.channel.send(message)
        self.logger.debug("%s enqueued %d messages", self.name, len(messages))
        return len(messages)

    async def run_forever(self) -> None:
        """Run the tick loop indefinitely."""
        self.logger.info(
            "Starting %s producer with %s second interval", self.name, self.interval_seconds
        )
        while True:
            await self.run_once()
            await asyncio.sleep(self.interval_seconds)

    async def close(self) -> None:
        """Clean up resources."""
