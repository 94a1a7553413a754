"""Exceptions raised by magpie components.

Components never terminate the process themselves. Every unrecoverable
condition is raised as a ``MagpieError`` subclass and reaches the entry
point, which logs it and exits with status 1.
"""


class MagpieError(Exception):
    """Base exception for all unrecoverable magpie errors."""


class ConfigurationError(MagpieError):
    """Raised when a required setting is missing or malformed."""


class FetchError(MagpieError):
    """Raised when an external data provider cannot be reached."""


class ParseError(MagpieError):
    """Raised when an external data provider returns an unusable body."""


class BrokerConnectionError(MagpieError):
    """Raised when the MQTT broker connection cannot be established."""


class PublishError(MagpieError):
    """Raised when the broker rejects or fails to deliver a publish."""


class ChannelClosedError(MagpieError):
    """Raised when sending on a delivery channel that has been closed."""
