"""Unit tests for the base producer loop."""

import asyncio
from unittest.mock import patch

import pytest

from magpie.channel import DeliveryChannel
from magpie.producers.base import BaseProducer
from magpie.schemas import Message


class StopLoop(Exception):
    """Raised by the patched sleep to end run_forever."""


class CountingProducer(BaseProducer):
    """Producer emitting two numbered messages per tick."""

    name = "counting"

    def __init__(self, channel: DeliveryChannel, interval_seconds: float = 5) -> None:
        super().__init__(channel, interval_seconds)
        self.ticks = 0

    async def produce(self) -> list[Message]:
        self.ticks += 1
        return [
            Message(topic=f"tick/{self.ticks}/a", payload="1"),
            Message(topic=f"tick/{self.ticks}/b", payload="2"),
        ]


class TestBaseProducer:
    @pytest.mark.asyncio
    async def test_run_once_sends_in_order(self, channel: DeliveryChannel, consumer):
        producer = CountingProducer(channel)
        consumer.start()

        assert await producer.run_once() == 2

        received = await consumer.finish()
        assert [msg.topic for msg in received] == ["tick/1/a", "tick/1/b"]

    @pytest.mark.asyncio
    async def test_run_forever_sleeps_interval_between_ticks(self, channel: DeliveryChannel, consumer):
        """Test the loop ticks, then sleeps the configured interval."""
        producer = CountingProducer(channel, interval_seconds=42)
        sleeps: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            sleeps.append(seconds)
            if len(sleeps) == 3:
                raise StopLoop

        consumer.start()
        with patch("magpie.producers.base.asyncio.sleep", fake_sleep):
            with pytest.raises(StopLoop):
                await producer.run_forever()

        assert producer.ticks == 3
        assert sleeps == [42, 42, 42]
        assert len(await consumer.finish()) == 6

    @pytest.mark.asyncio
    async def test_run_once_waits_for_each_receive(self):
        """Test a tick only advances as the consumer takes each message."""
        channel = DeliveryChannel()
        producer = CountingProducer(channel)

        tick = asyncio.create_task(producer.run_once())
        await asyncio.sleep(0.01)
        assert not tick.done()

        first = await channel.receive()
        await asyncio.sleep(0.01)
        assert not tick.done()

        second = await channel.receive()
        assert await asyncio.wait_for(tick, timeout=1) == 2

        assert first is not None and first.topic == "tick/1/a"
        assert second is not None and second.topic == "tick/1/b"
