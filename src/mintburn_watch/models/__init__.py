"""Data models for the mintburn_watch pipeline."""

from mintburn_watch.models.events import (
    PLACEHOLDER_META,
    Classification,
    LogEntry,
    TokenMeta,
    TransferEvent,
)
from mintburn_watch.models.records import BlockRange, PassResult
from mintburn_watch.models.config import HeadSource, WatcherConfig

__all__ = [
    "PLACEHOLDER_META", "Classification", "LogEntry", "TokenMeta", "TransferEvent",
    "BlockRange", "PassResult",
    "HeadSource", "WatcherConfig",
]
