"""CLI exit codes and output."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from mintburn_watch.cli import cli

from tests.test_config import ENV_KEYS


@pytest.fixture
def runner(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # Keep load_dotenv() away from any developer .env
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_run_exits_nonzero_without_required_settings(runner):
    result = runner.invoke(cli, ["run"])
    assert result.exit_code == 1
    assert "Missing required settings" in result.output


def test_check_exits_nonzero_without_required_settings(runner):
    result = runner.invoke(cli, ["check"])
    assert result.exit_code == 1


def test_status_masks_token(runner, monkeypatch):
    monkeypatch.setenv("TELEGRAM_TOKEN", "123456:SECRET-TOKEN")
    monkeypatch.setenv("TOKEN_ADDRESS", "0x4200000000000000000000000000000000000006")

    result = runner.invoke(cli, ["status"])

    assert result.exit_code == 0
    assert "SECRET" not in result.output
    assert "0x4200000000000000000000000000000000000006" in result.output
    assert "Source:        poll" in result.output


@pytest.mark.parametrize("command", ["run", "status"])
def test_malformed_config_file_exits_cleanly(runner, tmp_path, command):
    path = tmp_path / "watch.toml"
    path.write_text("[chain\nrpc_url = \n")

    result = runner.invoke(cli, ["-c", str(path), command])

    assert result.exit_code == 1
    assert "Cannot read config file" in result.output
    assert isinstance(result.exception, SystemExit)
