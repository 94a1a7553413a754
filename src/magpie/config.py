"""Configuration settings loaded from environment variables.

Each data source is enabled by the presence of its ``*_TOPIC`` variable.
``resolve()`` turns a source config into either ``Disabled`` or an immutable
parameter object once, at startup; producers only ever see the latter.
"""

import math
from dataclasses import dataclass
from urllib.parse import urlsplit

from pydantic import Field
from pydantic_settings import BaseSettings

from .errors import ConfigurationError
from .schemas import normalize_region

DEFAULT_MQTT_PORT = 1883

# Wildcards are only valid in subscriptions; NUL is never valid in a topic.
FORBIDDEN_TOPIC_CHARACTERS = ("#", "+", "\0")


@dataclass(frozen=True)
class Disabled:
    """A source that will not run."""

    source: str
    reason: str


@dataclass(frozen=True)
class SeasonSource:
    topic: str
    interval_seconds: float


@dataclass(frozen=True)
class DayPhaseSource:
    topic: str
    interval_seconds: float


@dataclass(frozen=True)
class DaylightSource:
    topic: str
    latitude: float
    longitude: float
    interval_seconds: float
    base_url: str


@dataclass(frozen=True)
class WeatherSource:
    topic: str
    region: str
    interval_seconds: float
    feed_url: str


class MQTTConfig(BaseSettings):
    """MQTT broker connection configuration."""

    host: str | None = None  # e.g. tcp://127.0.0.1:1883
    prefix: str = "/home.arpa"
    client_id: str = "magpie"
    keepalive_seconds: int = 2
    timeout_seconds: float = 1.0

    model_config = {"env_prefix": "MQTT_"}

    def broker_address(self) -> tuple[str, int]:
        """Split ``host`` into hostname and port.

        Accepts ``tcp://host:port``, ``mqtt://host:port`` and ``host[:port]``.
        """
        if not self.host or not self.host.strip():
            raise ConfigurationError(
                "magpie needs `MQTT_HOST` set in the environment to a value "
                "such as `tcp://127.0.0.1:1883`"
            )

        raw = self.host.strip()
        if "://" not in raw:
            raw = f"tcp://{raw}"

        try:
            parts = urlsplit(raw)
            port = parts.port
        except ValueError as e:
            raise ConfigurationError(f"could not parse `MQTT_HOST='{self.host}'`: {e}") from e

        if not parts.hostname:
            raise ConfigurationError(f"`MQTT_HOST='{self.host}'` has no hostname")

        return parts.hostname, port or DEFAULT_MQTT_PORT

    def topic_prefix(self) -> str:
        """Return ``prefix`` after checking it can start a publish topic."""
        _check_topic_characters("MQTT_PREFIX", self.prefix)
        return self.prefix


def _check_topic_characters(name: str, value: str) -> None:
    for character in FORBIDDEN_TOPIC_CHARACTERS:
        if character in value:
            raise ConfigurationError(
                f"environment variable `{name}={value!r}` must not contain {character!r}"
            )


def _check_topic(name: str, topic: str) -> str:
    """Reject a topic variable that is blank or not publishable."""
    if not topic.strip():
        raise ConfigurationError(f"environment variable `{name}` must not be empty")
    _check_topic_characters(name, topic)
    return topic


class SeasonConfig(BaseSettings):
    """Season source configuration."""

    topic: str | None = None
    fetch_interval_seconds: float = 3600

    model_config = {"env_prefix": "SEASON_"}

    def resolve(self) -> Disabled | SeasonSource:
        if self.topic is None:
            return Disabled("season", "needs `SEASON_TOPIC` set in the environment")
        return SeasonSource(
            topic=_check_topic("SEASON_TOPIC", self.topic),
            interval_seconds=self.fetch_interval_seconds,
        )


class DayPhaseConfig(BaseSettings):
    """Day phase source configuration."""

    topic: str | None = None
    fetch_interval_seconds: float = 60

    model_config = {"env_prefix": "DAYPHASE_"}

    def resolve(self) -> Disabled | DayPhaseSource:
        if self.topic is None:
            return Disabled("dayphase", "needs `DAYPHASE_TOPIC` set in the environment")
        return DayPhaseSource(
            topic=_check_topic("DAYPHASE_TOPIC", self.topic),
            interval_seconds=self.fetch_interval_seconds,
        )


def _parse_coordinate(name: str, value: str, limit: float) -> float:
    """Parse a latitude/longitude string, raising ConfigurationError if invalid."""
    try:
        parsed = float(value)
    except ValueError as e:
        raise ConfigurationError(
            f"could not parse environment variable `{name}='{value}'` as float"
        ) from e
    if not math.isfinite(parsed) or abs(parsed) > limit:
        raise ConfigurationError(
            f"environment variable `{name}='{value}'` must be between {-limit} and {limit}"
        )
    return parsed


class DaylightConfig(BaseSettings):
    """Daylight source configuration (sunrise-sunset.org)."""

    topic: str | None = None
    # Kept as strings so a malformed value only matters once the source is enabled.
    latitude: str | None = None
    longitude: str | None = None
    fetch_interval_seconds: float = 3600
    base_url: str = "https://api.sunrise-sunset.org"

    model_config = {"env_prefix": "DAYLIGHT_"}

    def resolve(self) -> Disabled | DaylightSource:
        if self.topic is None:
            return Disabled("daylight", "needs `DAYLIGHT_TOPIC` set in the environment")

        if self.latitude is None or self.longitude is None:
            raise ConfigurationError(
                "daylight needs both `DAYLIGHT_LATITUDE` and `DAYLIGHT_LONGITUDE` "
                "set in the environment"
            )

        return DaylightSource(
            topic=_check_topic("DAYLIGHT_TOPIC", self.topic),
            latitude=_parse_coordinate("DAYLIGHT_LATITUDE", self.latitude, 90.0),
            longitude=_parse_coordinate("DAYLIGHT_LONGITUDE", self.longitude, 180.0),
            interval_seconds=self.fetch_interval_seconds,
            base_url=self.base_url,
        )


class WeatherConfig(BaseSettings):
    """Weather source configuration (buienradar.nl)."""

    topic: str | None = None
    region: str | None = None  # e.g. "noord-holland"
    fetch_interval_seconds: float = 300
    feed_url: str = "https://data.buienradar.nl/1.0/feed/xml"

    model_config = {"env_prefix": "WEATHER_"}

    def resolve(self) -> Disabled | WeatherSource:
        if self.topic is None:
            return Disabled("weather", "needs `WEATHER_TOPIC` set in the environment")

        if self.region is None or not self.region.strip():
            raise ConfigurationError("weather needs `WEATHER_REGION` set in the environment")

        return WeatherSource(
            topic=_check_topic("WEATHER_TOPIC", self.topic),
            region=normalize_region(self.region.strip()),
            interval_seconds=self.fetch_interval_seconds,
            feed_url=self.feed_url,
        )


class Settings(BaseSettings):
    """Application settings combining all configs."""

    log_level: str = "INFO"
    mqtt: MQTTConfig = Field(default_factory=MQTTConfig)
    season: SeasonConfig = Field(default_factory=SeasonConfig)
    dayphase: DayPhaseConfig = Field(default_factory=DayPhaseConfig)
    daylight: DaylightConfig = Field(default_factory=DaylightConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
