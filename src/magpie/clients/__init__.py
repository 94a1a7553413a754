"""HTTP clients for external data providers."""

from .buienradar import BuienradarClient
from .sunrise import SunriseSunsetClient

__all__ = [
    "BuienradarClient",
    "SunriseSunsetClient",
]
