"""magpie - publish small public datasets to an MQTT broker.

This package runs periodic producers that compute or fetch one value each
and hand it to a single publisher over an in-process delivery channel:

- Season: current meteorological season
- Day phase: night, morning, afternoon or evening
- Daylight: whether the sun is up, from sunrise-sunset.org
- Weather: current station readings from buienradar.nl

Usage:
    from magpie.producers import SeasonProducer, WeatherProducer
    from magpie.schemas import Message
"""

__version__ = "0.1.0"

from .channel import DeliveryChannel
from .config import Settings, get_settings
from .errors import MagpieError
from .schemas import Message

__all__ = [
    "DeliveryChannel",
    "MagpieError",
    "Message",
    "Settings",
    "get_settings",
]
