"""Publisher that drains the delivery channel into the MQTT broker."""

import logging
from typing import Any, Protocol

from aiomqtt import MqttError

from .channel import DeliveryChannel
from .errors import PublishError
from .schemas import Message

# MQTT "at most once"
QOS_AT_MOST_ONCE = 0


class BrokerClientProtocol(Protocol):
    """Protocol for the MQTT client to allow mocking."""

    async def publish(
        self,
        topic: str,
        payload: Any = None,
        qos: int = 0,
        retain: bool = False,
    ) -> None: ...


class Publisher:
    """Sole consumer of the delivery channel and sole writer to the broker."""

    def __init__(
        self,
        client: BrokerClientProtocol,
        channel: DeliveryChannel,
        prefix: str = "/home.arpa",
        logger: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self.channel = channel
        self.prefix = prefix
        self.logger = logger or logging.getLogger(__name__)
        self.published_count = 0

    def topic_for(self, message: Message) -> str:
        """Full broker topic: ``<prefix>/<message.topic>``."""
        return f"{self.prefix.rstrip('/')}/{message.topic}"

    async def publish(self, message: Message) -> None:
        """Publish one message and wait for the client to finish.

        Raises:
            PublishError: The broker client reported a failure or rejected the topic.
        """
        topic = self.topic_for(message)

        try:
            await self.client.publish(
                topic,
                payload=message.payload,
                qos=QOS_AT_MOST_ONCE,
                retain=message.retain,
            )
        except (MqttError, ValueError) as e:
            # paho raises ValueError for topics it refuses to publish to
            raise PublishError(f"could not publish message to {topic!r}: {e}") from e

        self.published_count += 1
        self.logger.info("Published topic='%s' payload='%s'", topic, message.payload)

    async def run(self) -> None:
        """Publish messages until the channel is closed and drained."""
        async for message in self.channel:
            await self.publish(message)
        self.logger.info("Delivery channel closed, %d messages published", self.published_count)
