"""Event ingestion and deduplication pipeline."""

from mintburn_watch.pipeline.classifier import classify, decode_transfer
from mintburn_watch.pipeline.cursor import BlockCursor
from mintburn_watch.pipeline.dedup import Deduplicator
from mintburn_watch.pipeline.gate import ConfirmationGate
from mintburn_watch.pipeline.watcher import MintBurnWatcher

__all__ = [
    "classify", "decode_transfer",
    "BlockCursor",
    "Deduplicator",
    "ConfirmationGate",
    "MintBurnWatcher",
]
