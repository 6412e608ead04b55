"""Outbound notifications."""

from mintburn_watch.notify.format import build_message, format_units, tx_link
from mintburn_watch.notify.telegram import TelegramNotifier

__all__ = ["build_message", "format_units", "tx_link", "TelegramNotifier"]
