"""Bounded memory of already-notified transaction hashes."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class Deduplicator:
    """FIFO-bounded set of transaction hashes.

    When an insertion pushes the size past ``capacity``, the ``evict``
    oldest-inserted hashes are dropped. Hashes compare case-insensitively.
    """

    def __init__(self, capacity: int = 1000, evict: int = 200) -> None:
        self._capacity = capacity
        self._evict = evict
        self._seen: dict[str, None] = {}  # insertion-ordered

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, tx_hash: object) -> bool:
        return isinstance(tx_hash, str) and self.seen(tx_hash)

    def seen(self, tx_hash: str) -> bool:
        return tx_hash.lower() in self._seen

    def record(self, tx_hash: str) -> None:
        key = tx_hash.lower()
        if key in self._seen:
            return
        self._seen[key] = None
        if len(self._seen) > self._capacity:
            for old in list(self._seen)[: self._evict]:
                del self._seen[old]
            log.debug("Evicted %d oldest tx hashes (size now %d)", self._evict, len(self._seen))
