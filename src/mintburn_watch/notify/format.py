"""Markdown message formatting for mint/burn alerts."""

from __future__ import annotations

import logging

from mintburn_watch.models.events import Classification, TokenMeta

log = logging.getLogger(__name__)

_LABELS = {
    Classification.MINT: "🪙 Mint",
    Classification.BURN: "🔥 Burn",
}

MAX_DECIMALS = 255  # uint8

_MARKDOWN_SPECIALS = ("_", "*", "`", "[")


def escape_markdown(text: str) -> str:
    """Escape Telegram legacy Markdown characters in untrusted text."""
    for ch in _MARKDOWN_SPECIALS:
        text = text.replace(ch, "\\" + ch)
    return text


def format_units(raw: int, decimals: int) -> str:
    """Scale ``raw`` by 10**decimals into a decimal string.

    Always keeps at least one fractional digit and trims trailing zeros:
    format_units(10**18, 18) == "1.0", format_units(1500, 3) == "1.5".
    Raises ValueError for negative amounts or out-of-range decimals.
    """
    if raw < 0:
        raise ValueError(f"negative amount: {raw}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"decimals out of range: {decimals}")
    whole, frac = divmod(raw, 10**decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{whole}.{frac_str or '0'}"


def safe_format_units(raw: int, decimals: int) -> str:
    """format_units(), falling back to the raw integer string."""
    try:
        return format_units(raw, decimals)
    except (ValueError, TypeError) as exc:
        log.debug("Amount scaling failed (%s), using raw value", exc)
        return str(raw)


def tx_link(explorer_url: str, tx_hash: str) -> str:
    return f"{explorer_url.rstrip('/')}/tx/{tx_hash}"


def build_message(
    kind: Classification,
    meta: TokenMeta,
    token_address: str,
    sender: str,
    recipient: str,
    amount: int,
    tx_hash: str,
    block_number: int,
    network_name: str = "Base",
    explorer_url: str = "https://basescan.org",
) -> str:
    """Render the alert sent for a single mint or burn."""
    if kind not in _LABELS:
        raise ValueError(f"no alert for {kind.value} transfers")
    amount_str = safe_format_units(amount, meta.decimals)
    return (
        f"{_LABELS[kind]} detected on *{network_name}*\n\n"
        f"*Token:* {escape_markdown(meta.symbol)} (`{token_address}`)\n"
        f"*From:* `{sender}`\n"
        f"*To:* `{recipient}`\n"
        f"*Amount:* `{amount_str}`\n"
        f"*Tx:* [{tx_hash}]({tx_link(explorer_url, tx_hash)})\n"
        f"*Block:* {block_number}"
    )
