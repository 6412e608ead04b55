"""Push-subscribe source: newHeads and logs over a websocket.

Implements both BlockSource and LogFetcher, so the pipeline is unaware
that logs were pushed rather than fetched by range.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Mapping

from web3 import AsyncWeb3, WebSocketProvider

from mintburn_watch.chain.filter import subscription_filter
from mintburn_watch.errors import TransportError
from mintburn_watch.models.events import LogEntry, to_int

log = logging.getLogger(__name__)

_LogKey = tuple[int, str, int]  # (block_number, transaction_hash, log_index)


class SubscriptionSource:
    """Buffers pushed Transfer logs and serves them by block range.

    Each log is served from its own block, or from the block after the
    highest range already fetched when it arrives late (after the head it
    belongs to was processed). Logs are pruned once the requested range
    starts above that serving block, since the cursor only asks for blocks
    it has not yet passed. Logs flagged ``removed`` by a reorg are dropped
    from the buffer.
    """

    def __init__(self, ws_url: str, token_address: str | None = None) -> None:
        self._ws_url = ws_url
        self._filter = subscription_filter(token_address)
        # key -> (serving block, entry)
        self._buffer: dict[_LogKey, tuple[int, LogEntry]] = {}
        self._fetched_to: int | None = None

    @staticmethod
    def _key(entry: LogEntry) -> _LogKey:
        return (entry.block_number, entry.transaction_hash, entry.log_index)

    def ingest(self, raw: Mapping[str, Any]) -> None:
        """Add (or on reorg, remove) one pushed log."""
        entry = LogEntry.from_rpc(raw)
        key = self._key(entry)
        if raw.get("removed"):
            if self._buffer.pop(key, None) is not None:
                log.info(
                    "Dropped reorged log tx=%s block=%d",
                    entry.transaction_hash, entry.block_number,
                )
            return
        if key in self._buffer:
            return
        serve_at = entry.block_number
        if self._fetched_to is not None and serve_at <= self._fetched_to:
            serve_at = self._fetched_to + 1
            log.debug(
                "Late log tx=%s block=%d, serving from block %d",
                entry.transaction_hash, entry.block_number, serve_at,
            )
        self._buffer[key] = (serve_at, entry)

    async def fetch(self, from_block: int, to_block: int) -> list[LogEntry]:
        for key in [k for k, (at, _) in self._buffer.items() if at < from_block]:
            del self._buffer[key]
        if self._fetched_to is None or to_block > self._fetched_to:
            self._fetched_to = to_block
        return sorted(
            (e for at, e in self._buffer.values() if at <= to_block),
            key=lambda e: (e.block_number, e.log_index),
        )

    @property
    def buffered(self) -> int:
        return len(self._buffer)

    async def heads(self) -> AsyncIterator[int]:
        """Open the websocket, subscribe, and yield each new head height.

        Connection failures raise TransportError; the daemon reconnects by
        calling heads() again. The log buffer survives reconnects.
        """
        try:
            async with AsyncWeb3(WebSocketProvider(self._ws_url)) as w3:
                heads_id = await w3.eth.subscribe("newHeads")
                logs_id = await w3.eth.subscribe("logs", self._filter)
                log.info("Subscribed to newHeads and logs on %s", self._ws_url)

                async for message in w3.socket.process_subscriptions():
                    result = message["result"]
                    if message["subscription"] == logs_id:
                        self.ingest(result)
                    elif message["subscription"] == heads_id:
                        yield to_int(result["number"])
        except TransportError:
            raise
        except Exception as exc:
            raise TransportError(f"websocket subscription failed: {exc}") from exc
