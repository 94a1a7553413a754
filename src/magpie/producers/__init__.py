"""Producers for magpie data sources."""

from .base import BaseProducer
from .daylight import DaylightProducer
from .dayphase import DayPhaseProducer, dayphase_for
from .season import SeasonProducer, season_for
from .weather import WeatherProducer, find_station, station_messages

__all__ = [
    "BaseProducer",
    "DayPhaseProducer",
    "DaylightProducer",
    "SeasonProducer",
    "WeatherProducer",
    "dayphase_for",
    "find_station",
    "season_for",
    "station_messages",
]
