"""web3.py-backed chain client.

Transport failures surface as TransportError; unreadable token call
results as DecodeError.
"""

from __future__ import annotations

import logging
from typing import Any

from eth_abi import decode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3

from mintburn_watch.errors import DecodeError, TransportError

log = logging.getLogger(__name__)

_SYMBOL_SELECTOR = function_signature_to_4byte_selector("symbol()")
_DECIMALS_SELECTOR = function_signature_to_4byte_selector("decimals()")


def decode_symbol(raw: bytes) -> str:
    """Decode symbol() output as ABI string, or bytes32 for legacy tokens."""
    if len(raw) == 32:
        return raw.rstrip(b"\x00").decode("utf-8", errors="replace")
    (symbol,) = decode(["string"], raw)
    return symbol


class Web3ChainClient:
    """Read-only JSON-RPC access to an EVM chain via AsyncWeb3."""

    def __init__(self, rpc_url: str, w3: AsyncWeb3 | None = None) -> None:
        self._rpc_url = rpc_url
        self._w3 = w3 or AsyncWeb3(AsyncHTTPProvider(rpc_url))

    async def block_number(self) -> int:
        try:
            return int(await self._w3.eth.block_number)
        except Exception as exc:
            raise TransportError(f"eth_blockNumber failed: {exc}") from exc

    async def get_logs(self, params: dict[str, Any]) -> list[Any]:
        try:
            return list(await self._w3.eth.get_logs(params))
        except Exception as exc:
            raise TransportError(
                f"eth_getLogs {params.get('fromBlock')}..{params.get('toBlock')} failed: {exc}"
            ) from exc

    async def _call(self, address: str, selector: bytes) -> bytes:
        try:
            result = await self._w3.eth.call(
                {"to": to_checksum_address(address), "data": "0x" + selector.hex()}
            )
        except Exception as exc:
            raise TransportError(f"eth_call to {address} failed: {exc}") from exc
        if not result:
            raise TransportError(f"eth_call to {address} returned no data")
        return bytes(result)

    async def token_symbol(self, address: str) -> str:
        raw = await self._call(address, _SYMBOL_SELECTOR)
        try:
            return decode_symbol(raw)
        except Exception as exc:
            raise DecodeError(f"undecodable symbol() from {address}: {exc}") from exc

    async def token_decimals(self, address: str) -> int:
        raw = await self._call(address, _DECIMALS_SELECTOR)
        try:
            (decimals,) = decode(["uint256"], raw)
        except Exception as exc:
            raise DecodeError(f"undecodable decimals() from {address}: {exc}") from exc
        return int(decimals)
