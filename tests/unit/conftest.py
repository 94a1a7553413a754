"""Unit test fixtures - mocks and sample data."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from magpie.channel import DeliveryChannel
from magpie.schemas import Message

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class FixedClock:
    """Clock returning a settable UTC instant."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock fixed at 2024-07-15 12:00 UTC."""
    return FixedClock(datetime(2024, 7, 15, 12, 0, tzinfo=timezone.utc))


class ChannelConsumer:
    """Background receiver standing in for the publisher."""

    def __init__(self, channel: DeliveryChannel) -> None:
        self.channel = channel
        self.messages: list[Message] = []
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        self._task = asyncio.create_task(self._consume())

    async def _consume(self) -> None:
        async for message in self.channel:
            self.messages.append(message)

    async def finish(self) -> list[Message]:
        """Close the channel and return everything received."""
        await self.channel.close()
        if self._task is not None:
            await asyncio.wait_for(self._task, timeout=1)
        return self.messages


@pytest.fixture
def channel() -> DeliveryChannel:
    """Delivery channel shared by a producer and a consumer."""
    return DeliveryChannel()


@pytest.fixture
def consumer(channel: DeliveryChannel) -> ChannelConsumer:
    """Consumer for the channel fixture; call start() inside the test."""
    return ChannelConsumer(channel)


@pytest.fixture
def mock_mqtt_client() -> MagicMock:
    """Mock MQTT client."""
    client = MagicMock()
    client.publish = AsyncMock(return_value=None)
    return client


@pytest.fixture
def buienradar_feed() -> bytes:
    """Load buienradar.nl feed fixture."""
    return (FIXTURES_DIR / "buienradar" / "feed.xml").read_bytes()


@pytest.fixture
def sunrise_sunset_body() -> bytes:
    """Load sunrise-sunset.org response fixture."""
    return (FIXTURES_DIR / "sunrise_sunset" / "today.json").read_bytes()
