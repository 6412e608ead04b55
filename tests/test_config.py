"""Configuration loading and validation."""

from __future__ import annotations

import pytest

from mintburn_watch.config import load_config, validate_config
from mintburn_watch.errors import ConfigError
from mintburn_watch.models.config import HeadSource

from tests.conftest import make_test_config

ENV_KEYS = (
    "RPC_URL", "WS_URL", "SOURCE", "TELEGRAM_TOKEN", "TELEGRAM_CHAT_ID",
    "CONFIRMATIONS", "TOKEN_ADDRESS", "NETWORK_NAME", "EXPLORER_URL", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_env_only(monkeypatch):
    monkeypatch.setenv("RPC_URL", "https://sepolia.base.org")
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
    monkeypatch.setenv("TELEGRAM_CHAT_ID", "-100")
    monkeypatch.setenv("CONFIRMATIONS", "3")

    cfg = load_config()
    validate_config(cfg)

    assert cfg.rpc_url == "https://sepolia.base.org"
    assert cfg.confirmations == 3
    assert cfg.token_address is None
    assert cfg.source == HeadSource.POLL


def test_env_overrides_toml(tmp_path, monkeypatch):
    path = tmp_path / "watch.toml"
    path.write_text(
        '[chain]\nrpc_url = "http://file"\nnetwork_name = "Base Sepolia"\n'
        '[watch]\nconfirmations = 2\n'
        '[telegram]\ntoken = "file-token"\nchat_id = "1"\n'
    )
    monkeypatch.setenv("RPC_URL", "http://env")

    cfg = load_config(path)

    assert cfg.rpc_url == "http://env"
    assert cfg.network_name == "Base Sepolia"
    assert cfg.confirmations == 2
    assert cfg.telegram_token == "file-token"


def test_malformed_toml_is_config_error(tmp_path):
    path = tmp_path / "watch.toml"
    path.write_text("[chain\nrpc_url = \n")

    with pytest.raises(ConfigError, match="Cannot read config file"):
        load_config(path)


def test_missing_required_settings_named():
    with pytest.raises(ConfigError) as exc_info:
        validate_config(load_config())
    message = str(exc_info.value)
    for key in ("RPC_URL", "TELEGRAM_TOKEN", "TELEGRAM_CHAT_ID"):
        assert key in message


def test_non_integer_confirmations(monkeypatch):
    monkeypatch.setenv("CONFIRMATIONS", "many")
    with pytest.raises(ConfigError):
        load_config()


@pytest.mark.parametrize(
    "overrides",
    [
        dict(confirmations=0),
        dict(source=HeadSource.SUBSCRIBE, ws_url=""),
        dict(token_address="0x1234"),
        dict(dedup_evict=0),
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ConfigError):
        validate_config(make_test_config(**overrides))


def test_unknown_source(monkeypatch):
    monkeypatch.setenv("SOURCE", "carrier-pigeon")
    with pytest.raises(ConfigError, match="Unknown source"):
        load_config()
