"""Message schema for the delivery channel."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """A single value on its way to the broker.

    ``topic`` is relative; the publisher joins it onto the configured prefix.
    Retained messages carry state (season, day phase, daylight), non-retained
    ones carry point-in-time readings (weather).
    """

    model_config = ConfigDict(frozen=True)

    topic: Annotated[str, Field(min_length=1)]
    payload: str
    retain: bool = False
