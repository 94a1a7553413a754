"""Daylight producer backed by sunrise-sunset.org."""

import logging

from ..channel import DeliveryChannel
from ..clients.sunrise import SunriseSunsetClient
from ..config import DaylightSource
from ..schemas import Message
from .base import BaseProducer, Clock, utc_now


class DaylightProducer(BaseProducer):
    """Publishes ``yes``/``no`` depending on whether the sun is up.

    The daylight window is fetched again on every tick since it changes
    from day to day.
    """

    name = "daylight"

    def __init__(
        self,
        source: DaylightSource,
        channel: DeliveryChannel,
        client: SunriseSunsetClient | None = None,
        clock: Clock = utc_now,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(channel, source.interval_seconds, clock, logger)
        self.source = source
        self._client = client

    @property
    def client(self) -> SunriseSunsetClient:
        """Lazy-initialize sunrise-sunset.org client."""
        if self._client is None:
            self._client = SunriseSunsetClient(self.source.base_url)
        return self._client

    async def produce(self) -> list[Message]:
        window = await self.client.get_daylight_window(self.source.latitude, self.source.longitude)
        payload = "yes" if window.is_daylight(self.clock()) else "no"
        return [Message(topic=self.source.topic, payload=payload, retain=True)]

    async def close(self) -> None:
        """Clean up resources."""
        if self._client is not None:
            await self._client.close()
