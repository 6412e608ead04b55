"""Chain log and decoded Transfer event models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


def to_hex(value: Any) -> str:
    """Normalize bytes/HexBytes/str to a lower-case 0x-prefixed hex string."""
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    text = str(value).lower()
    return text if text.startswith("0x") else "0x" + text


def to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    return int(str(value), 16) if str(value).startswith("0x") else int(value)


@dataclass(frozen=True)
class LogEntry:
    """A raw event log as returned by eth_getLogs or a logs subscription."""

    address: str
    topics: tuple[str, ...]
    data: str  # 0x-hex payload
    transaction_hash: str
    block_number: int
    log_index: int = 0

    @classmethod
    def from_rpc(cls, raw: Mapping[str, Any]) -> "LogEntry":
        """Build from a web3-formatted log or a raw JSON-RPC log object."""
        return cls(
            address=str(raw["address"]),
            topics=tuple(to_hex(t) for t in raw.get("topics", ())),
            data=to_hex(raw.get("data", b"")),
            transaction_hash=to_hex(raw["transactionHash"]),
            block_number=to_int(raw["blockNumber"]),
            log_index=to_int(raw.get("logIndex", 0)),
        )


@dataclass(frozen=True)
class TransferEvent:
    """Decoded Transfer(address indexed from, address indexed to, uint256 value)."""

    sender: str  # checksummed
    recipient: str  # checksummed
    amount: int


class Classification(str, Enum):
    """What a Transfer event means for token supply."""

    MINT = "mint"
    BURN = "burn"
    IGNORED = "ignored"


@dataclass(frozen=True)
class TokenMeta:
    """ERC-20 display metadata for a contract."""

    symbol: str
    decimals: int


PLACEHOLDER_META = TokenMeta(symbol="TOKEN", decimals=18)
