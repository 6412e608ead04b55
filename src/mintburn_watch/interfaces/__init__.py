"""Protocol interfaces for all mintburn_watch components."""

from mintburn_watch.interfaces.chain import ChainReader
from mintburn_watch.interfaces.fetcher import LogFetcher
from mintburn_watch.interfaces.heads import BlockSource
from mintburn_watch.interfaces.notifier import Notifier

__all__ = [
    "ChainReader",
    "LogFetcher",
    "BlockSource",
    "Notifier",
]
