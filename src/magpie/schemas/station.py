"""Weather station record schema for the buienradar.nl feed."""

from pydantic import BaseModel

# Sub-topic per field, in publish order.
STATION_FIELD_TOPICS: dict[str, str] = {
    "humidity": "humidity",
    "temperature_ground": "temperature.ground",
    "temperature_10cm": "temperature.10cm",
    "wind_speed": "wind",
    "gust_speed": "gust",
    "air_pressure": "pressure",
    "rain": "rain",
    "sight_range": "sight",
}


def normalize_region(region: str) -> str:
    """Lowercase a region name and replace spaces with hyphens."""
    return region.lower().replace(" ", "-")


class StationRecord(BaseModel):
    """Current readings of one weather station.

    Readings are kept as the provider's text so they are republished
    unchanged. ``None`` means the provider reported the value as absent.
    """

    code: str | None = None
    name: str | None = None
    region: str = ""

    humidity: str | None = None
    temperature_ground: str | None = None
    temperature_10cm: str | None = None
    wind_speed: str | None = None
    gust_speed: str | None = None
    air_pressure: str | None = None
    sight_range: str | None = None
    rain: str | None = None

    @property
    def normalized_region(self) -> str:
        """Region name in configuration form, e.g. ``noord-holland``."""
        return normalize_region(self.region)

    def present_fields(self) -> list[tuple[str, str]]:
        """Return ``(sub_topic, value)`` pairs for every present reading."""
        pairs: list[tuple[str, str]] = []
        for field, sub_topic in STATION_FIELD_TOPICS.items():
            value = getattr(self, field)
            if value is not None:
                pairs.append((sub_topic, value))
        return pairs
