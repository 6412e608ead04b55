"""mintburn_watch - relays ERC-20 mint and burn events to Telegram."""

__version__ = "0.1.0"
