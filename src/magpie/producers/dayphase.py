"""Day phase producer."""

import logging
from datetime import datetime

from ..channel import DeliveryChannel
from ..config import DayPhaseSource
from ..schemas import DayPhase, Message
from .base import BaseProducer, Clock, utc_now


def dayphase_for(moment: datetime) -> DayPhase:
    """Phase of the day for the hour of ``moment``.

    night 00-05, morning 06-11, afternoon 12-17, evening 18-23.
    """
    hour = moment.hour
    if hour < 6:
        return DayPhase.NIGHT
    if hour < 12:
        return DayPhase.MORNING
    if hour < 18:
        return DayPhase.AFTERNOON
    return DayPhase.EVENING


class DayPhaseProducer(BaseProducer):
    """Publishes the current day phase as a retained ``dayphase value=<phase>`` message."""

    name = "dayphase"

    def __init__(
        self,
        source: DayPhaseSource,
        channel: DeliveryChannel,
        clock: Clock = utc_now,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(channel, source.interval_seconds, clock, logger)
        self.source = source

    async def produce(self) -> list[Message]:
        phase = dayphase_for(self.clock())
        return [
            Message(topic=self.source.topic, payload=f"dayphase value={phase.value}", retain=True)
        ]
