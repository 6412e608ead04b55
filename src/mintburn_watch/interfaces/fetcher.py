"""LogFetcher protocol - retrieves Transfer logs for a block range."""

from __future__ import annotations

from typing import Protocol

from mintburn_watch.models.events import LogEntry


class LogFetcher(Protocol):
    """Returns matching logs for an inclusive block range."""

    async def fetch(self, from_block: int, to_block: int) -> list[LogEntry]:
        """Logs ordered by (block_number, log_index). Raises TransportError."""
        ...
