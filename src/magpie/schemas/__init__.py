"""Value objects passed between magpie components.

Pydantic models for channel messages and parsed provider data.
"""

from .daylight import DaylightWindow, SunriseSunsetResponse
from .enums import DayPhase, Season
from .message import Message
from .station import STATION_FIELD_TOPICS, StationRecord, normalize_region

__all__ = [
    "DayPhase",
    "DaylightWindow",
    "Message",
    "STATION_FIELD_TOPICS",
    "Season",
    "StationRecord",
    "SunriseSunsetResponse",
    "normalize_region",
]
