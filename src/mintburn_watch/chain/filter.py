"""Log filter construction for ERC-20 Transfer events."""

from __future__ import annotations

from typing import Any

from eth_utils import keccak, to_checksum_address

TRANSFER_SIGNATURE = "Transfer(address,address,uint256)"
TRANSFER_TOPIC = "0x" + keccak(text=TRANSFER_SIGNATURE).hex()

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def subscription_filter(token_address: str | None) -> dict[str, Any]:
    """Address/topic pattern shared by eth_getLogs and eth_subscribe("logs")."""
    params: dict[str, Any] = {"topics": [TRANSFER_TOPIC]}
    if token_address:
        params["address"] = to_checksum_address(token_address)
    return params


def build_log_filter(
    token_address: str | None,
    from_block: int,
    to_block: int,
) -> dict[str, Any]:
    """eth_getLogs params for Transfer events in an inclusive block range.

    With no token address, every contract emitting Transfer matches.
    """
    params = subscription_filter(token_address)
    params["fromBlock"] = from_block
    params["toBlock"] = to_block
    return params
