"""ChainReader protocol - the read calls the pipeline makes against the chain."""

from __future__ import annotations

from typing import Protocol


class ChainReader(Protocol):
    """Thin read-only view of the chain. All methods raise TransportError."""

    async def block_number(self) -> int:
        ...

    async def token_symbol(self, address: str) -> str:
        ...

    async def token_decimals(self, address: str) -> int:
        ...
