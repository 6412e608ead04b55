"""Poll-by-range log fetcher using eth_getLogs."""

from __future__ import annotations

import logging

from mintburn_watch.chain.filter import build_log_filter
from mintburn_watch.chain.rpc import Web3ChainClient
from mintburn_watch.models.events import LogEntry

log = logging.getLogger(__name__)


class RpcLogFetcher:
    """Fetches Transfer logs for a block range from the HTTP RPC endpoint."""

    def __init__(self, client: Web3ChainClient, token_address: str | None = None) -> None:
        self._client = client
        self._token_address = token_address

    async def fetch(self, from_block: int, to_block: int) -> list[LogEntry]:
        params = build_log_filter(self._token_address, from_block, to_block)
        raw_logs = await self._client.get_logs(params)
        logs = sorted(
            (LogEntry.from_rpc(raw) for raw in raw_logs),
            key=lambda e: (e.block_number, e.log_index),
        )
        if logs:
            log.debug("Fetched %d logs in blocks %d..%d", len(logs), from_block, to_block)
        return logs
