"""Weather producer backed by the buienradar.nl station feed."""

import logging

from ..channel import DeliveryChannel
from ..clients.buienradar import BuienradarClient
from ..config import WeatherSource
from ..schemas import Message, StationRecord, normalize_region
from .base import BaseProducer, Clock, utc_now


def find_station(stations: list[StationRecord], region: str) -> StationRecord | None:
    """Return the first station whose normalized region equals ``region``."""
    wanted = normalize_region(region)
    for station in stations:
        if station.normalized_region == wanted:
            return station
    return None


def station_messages(station: StationRecord, topic: str) -> list[Message]:
    """One non-retained message per present reading, in publish order."""
    return [
        Message(topic=f"{topic}/{sub_topic}", payload=value, retain=False)
        for sub_topic, value in station.present_fields()
    ]


class WeatherProducer(BaseProducer):
    """Publishes the current readings of the station in the configured region."""

    name = "weather"

    def __init__(
        self,
        source: WeatherSource,
        channel: DeliveryChannel,
        client: BuienradarClient | None = None,
        clock: Clock = utc_now,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(channel, source.interval_seconds, clock, logger)
        self.source = source
        self._client = client

    @property
    def client(self) -> BuienradarClient:
        """Lazy-initialize buienradar.nl client."""
        if self._client is None:
            self._client = BuienradarClient(self.source.feed_url)
        return self._client

    async def produce(self) -> list[Message]:
        stations = await self.client.get_stations()
        station = find_station(stations, self.source.region)

        if station is None:
            self.logger.warning(
                "No weather station found for region %r among %d stations",
                self.source.region,
                len(stations),
            )
            return []

        return station_messages(station, self.source.topic)

    async def close(self) -> None:
        """Clean up resources."""
        if self._client is not None:
            await self._client.close()
