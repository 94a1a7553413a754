"""Season producer."""

import logging
from datetime import datetime

from ..channel import DeliveryChannel
from ..config import SeasonSource
from ..schemas import Message, Season
from .base import BaseProducer, Clock, utc_now


def season_for(moment: datetime) -> Season:
    """Meteorological season for the month of ``moment``."""
    month = moment.month
    if month < 3:
        return Season.WINTER
    if month < 6:
        return Season.SPRING
    if month < 9:
        return Season.SUMMER
    if month < 12:
        return Season.FALL
    return Season.WINTER


class SeasonProducer(BaseProducer):
    """Publishes the current season as a retained message."""

    name = "season"

    def __init__(
        self,
        source: SeasonSource,
        channel: DeliveryChannel,
        clock: Clock = utc_now,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(channel, source.interval_seconds, clock, logger)
        self.source = source

    async def produce(self) -> list[Message]:
        season = season_for(self.clock())
        return [Message(topic=self.source.topic, payload=season.value, retain=True)]
