"""Configuration loading: optional TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from eth_utils import is_address

from mintburn_watch.errors import ConfigError
from mintburn_watch.models.config import HeadSource, WatcherConfig


def load_config(config_path: str | Path | None = None) -> WatcherConfig:
    """Load watcher configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (RPC_URL, TELEGRAM_TOKEN, etc.)
        2. TOML config file
        3. Defaults from WatcherConfig

    Raises ConfigError if the TOML file cannot be read or parsed.
    Values are not validated here; see validate_config().
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            try:
                with open(p, "rb") as f:
                    raw = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise ConfigError(f"Cannot read config file {p}: {exc}") from exc

    cfg = WatcherConfig()

    # ── Daemon section ─────────────────────────────────────
    daemon = raw.get("daemon", {})
    if v := daemon.get("poll_interval"):
        cfg.poll_interval = float(v)
    if v := daemon.get("error_backoff"):
        cfg.error_backoff = float(v)
    if v := daemon.get("log_level"):
        cfg.log_level = str(v)

    # ── Chain section ──────────────────────────────────────
    chain = raw.get("chain", {})
    if v := chain.get("rpc_url"):
        cfg.rpc_url = str(v)
    if v := chain.get("ws_url"):
        cfg.ws_url = str(v)
    if v := chain.get("source"):
        cfg.source = _parse_source(v)
    if v := chain.get("network_name"):
        cfg.network_name = str(v)
    if v := chain.get("explorer_url"):
        cfg.explorer_url = str(v)

    # ── Watch section ──────────────────────────────────────
    watch = raw.get("watch", {})
    if (v := watch.get("confirmations")) is not None:
        cfg.confirmations = _parse_int("confirmations", v)
    if v := watch.get("token_address"):
        cfg.token_address = str(v)
    if (v := watch.get("dedup_capacity")) is not None:
        cfg.dedup_capacity = _parse_int("dedup_capacity", v)
    if (v := watch.get("dedup_evict")) is not None:
        cfg.dedup_evict = _parse_int("dedup_evict", v)

    # ── Telegram section ───────────────────────────────────
    telegram = raw.get("telegram", {})
    if v := telegram.get("token"):
        cfg.telegram_token = str(v)
    if v := telegram.get("chat_id"):
        cfg.telegram_chat_id = str(v)

    # ── Environment variable overrides (highest priority) ──
    env = os.environ
    if v := env.get("RPC_URL"):
        cfg.rpc_url = v
    if v := env.get("WS_URL"):
        cfg.ws_url = v
    if v := env.get("SOURCE"):
        cfg.source = _parse_source(v)
    if v := env.get("TELEGRAM_TOKEN"):
        cfg.telegram_token = v
    if v := env.get("TELEGRAM_CHAT_ID"):
        cfg.telegram_chat_id = v
    if v := env.get("CONFIRMATIONS"):
        cfg.confirmations = _parse_int("CONFIRMATIONS", v)
    if v := env.get("TOKEN_ADDRESS"):
        cfg.token_address = v
    if v := env.get("NETWORK_NAME"):
        cfg.network_name = v
    if v := env.get("EXPLORER_URL"):
        cfg.explorer_url = v
    if v := env.get("LOG_LEVEL"):
        cfg.log_level = v

    return cfg


def validate_config(cfg: WatcherConfig) -> None:
    """Raise ConfigError if the configuration cannot start a watcher."""
    missing = [
        name
        for name, value in (
            ("RPC_URL", cfg.rpc_url),
            ("TELEGRAM_TOKEN", cfg.telegram_token),
            ("TELEGRAM_CHAT_ID", cfg.telegram_chat_id),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing required settings: {', '.join(missing)}")

    if cfg.confirmations < 1:
        raise ConfigError(f"CONFIRMATIONS must be >= 1, got {cfg.confirmations}")
    if cfg.source == HeadSource.SUBSCRIBE and not cfg.ws_url:
        raise ConfigError("source=subscribe requires WS_URL")
    if cfg.token_address and not is_address(cfg.token_address):
        raise ConfigError(f"TOKEN_ADDRESS is not a valid address: {cfg.token_address}")
    if cfg.dedup_evict < 1 or cfg.dedup_evict > cfg.dedup_capacity:
        raise ConfigError("dedup_evict must be between 1 and dedup_capacity")


def _parse_source(value: object) -> HeadSource:
    try:
        return HeadSource(str(value).lower())
    except ValueError:
        raise ConfigError(
            f"Unknown source {value!r} (expected 'poll' or 'subscribe')"
        ) from None


def _parse_int(name: str, value: object) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
