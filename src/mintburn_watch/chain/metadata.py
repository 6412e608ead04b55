"""Token symbol/decimals resolution with a process-lifetime cache."""

from __future__ import annotations

import logging

from eth_utils import to_checksum_address

from mintburn_watch.interfaces.chain import ChainReader
from mintburn_watch.models.events import TokenMeta
from mintburn_watch.retry import RetryPolicy

log = logging.getLogger(__name__)


class TokenMetadataResolver:
    """Resolves ERC-20 metadata, caching each contract forever once fetched.

    Each of symbol() and decimals() is retried independently. If either
    ultimately fails, TransportError propagates and nothing is cached.
    DecodeError from an unreadable response is raised without retrying.
    """

    def __init__(self, chain: ChainReader, retry: RetryPolicy | None = None) -> None:
        self._chain = chain
        self._retry = retry or RetryPolicy()
        self._cache: dict[str, TokenMeta] = {}

    def cached(self, address: str) -> TokenMeta | None:
        return self._cache.get(to_checksum_address(address))

    async def resolve(self, address: str) -> TokenMeta:
        address = to_checksum_address(address)
        if (meta := self._cache.get(address)) is not None:
            return meta

        symbol = await self._retry.run(
            lambda: self._chain.token_symbol(address), what=f"symbol({address})",
        )
        decimals = await self._retry.run(
            lambda: self._chain.token_decimals(address), what=f"decimals({address})",
        )
        meta = TokenMeta(symbol=symbol, decimals=decimals)
        self._cache[address] = meta
        log.info("Resolved token %s: %s (%d decimals)", address, symbol, decimals)
        return meta
