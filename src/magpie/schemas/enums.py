"""Enums for published state values."""

from enum import Enum


class Season(str, Enum):
    """Meteorological season, derived from the UTC month."""

    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"


class DayPhase(str, Enum):
    """Coarse phase of the day, derived from the UTC hour."""

    NIGHT = "night"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
