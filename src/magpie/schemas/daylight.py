"""Daylight window schema for sunrise-sunset.org responses."""

from datetime import datetime, timezone

from pydantic import BaseModel, field_validator


class DaylightWindow(BaseModel):
    """Sunrise and sunset instants for one day."""

    sunrise: datetime
    sunset: datetime

    @field_validator("sunrise", "sunset")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Require timezone-aware instants and convert them to UTC."""
        if v.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")
        return v.astimezone(timezone.utc)

    def is_daylight(self, now: datetime) -> bool:
        """Return True unless ``now`` is before sunrise or after sunset.

        Both boundaries count as daylight.
        """
        now = now.astimezone(timezone.utc)
        return not (now < self.sunrise or now > self.sunset)


class SunriseSunsetResponse(BaseModel):
    """Top-level sunrise-sunset.org JSON document.

    Only the fields magpie uses are modelled; the provider's twilight and
    solar noon fields are ignored.
    """

    status: str
    results: DaylightWindow
