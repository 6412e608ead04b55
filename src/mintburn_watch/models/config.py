"""Configuration models for the watcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HeadSource(str, Enum):
    """How new-block signals and logs reach the pipeline."""

    POLL = "poll"  # poll eth_blockNumber, fetch with eth_getLogs
    SUBSCRIBE = "subscribe"  # websocket newHeads + logs subscriptions


@dataclass
class WatcherConfig:
    """Complete watcher configuration."""

    # Daemon
    poll_interval: float = 2.0  # seconds
    error_backoff: float = 5.0  # seconds
    log_level: str = "info"

    # Chain
    rpc_url: str = ""
    ws_url: str = ""
    source: HeadSource = HeadSource.POLL
    network_name: str = "Base"
    explorer_url: str = "https://basescan.org"

    # Watch
    confirmations: int = 1
    token_address: str | None = None  # None watches every contract

    # Telegram
    telegram_token: str = ""
    telegram_chat_id: str = ""

    # Pipeline tuning
    dedup_capacity: int = 1000
    dedup_evict: int = 200
    metadata_retries: int = 2
    retry_factor: float = 1.5
    retry_min_delay: float = 1.0  # seconds
