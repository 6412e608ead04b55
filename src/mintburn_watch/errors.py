"""Exception hierarchy for the watcher."""

from __future__ import annotations


class WatchError(Exception):
    """Base class for all watcher errors."""


class ConfigError(WatchError):
    """Required configuration is missing or invalid. Fatal at startup."""


class TransportError(WatchError):
    """The chain data source was unreachable or rejected a request."""


class DecodeError(WatchError):
    """A log entry does not match the expected Transfer event layout."""


class DispatchError(WatchError):
    """A notification could not be delivered to the messaging channel."""
