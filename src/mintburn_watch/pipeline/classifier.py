"""Decodes Transfer logs and classifies them as mint, burn or ignored."""

from __future__ import annotations

from eth_utils import to_checksum_address

from mintburn_watch.chain.filter import TRANSFER_TOPIC, ZERO_ADDRESS
from mintburn_watch.errors import DecodeError
from mintburn_watch.models.events import Classification, LogEntry, TransferEvent

_WORD_HEX_LEN = 64  # one 32-byte ABI word


def _topic_address(topic: str) -> str:
    body = topic[2:] if topic.startswith("0x") else topic
    if len(body) != _WORD_HEX_LEN or body[:24].strip("0"):
        raise DecodeError(f"topic is not a padded address: {topic}")
    return to_checksum_address("0x" + body[-40:])


def decode_transfer(entry: LogEntry) -> TransferEvent:
    """Decode an ERC-20 Transfer log.

    Raises DecodeError unless the log has exactly three topics (signature,
    from, to), topic0 is the Transfer signature, and the data payload is a
    single 32-byte word. ERC-721 Transfers (four topics) are rejected.
    """
    if len(entry.topics) != 3:
        raise DecodeError(
            f"expected 3 topics, got {len(entry.topics)} (tx {entry.transaction_hash})"
        )
    if entry.topics[0].lower() != TRANSFER_TOPIC:
        raise DecodeError(f"topic0 is not Transfer: {entry.topics[0]}")

    data = entry.data[2:] if entry.data.startswith("0x") else entry.data
    if len(data) != _WORD_HEX_LEN:
        raise DecodeError(
            f"expected 32-byte data, got {len(data) // 2} bytes (tx {entry.transaction_hash})"
        )
    try:
        amount = int(data, 16)
    except ValueError:
        raise DecodeError(f"data is not hex: {entry.data}") from None

    return TransferEvent(
        sender=_topic_address(entry.topics[1]),
        recipient=_topic_address(entry.topics[2]),
        amount=amount,
    )


def classify(event: TransferEvent) -> Classification:
    """Mint iff only the sender is zero; burn iff only the recipient is zero.

    A zero-to-zero transfer is treated as an ordinary transfer.
    """
    from_zero = event.sender.lower() == ZERO_ADDRESS
    to_zero = event.recipient.lower() == ZERO_ADDRESS
    if from_zero and not to_zero:
        return Classification.MINT
    if to_zero and not from_zero:
        return Classification.BURN
    return Classification.IGNORED
