"""CLI entry point for the mintburn_watch daemon."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from dotenv import find_dotenv, load_dotenv

from mintburn_watch.config import load_config, validate_config
from mintburn_watch.daemon import WatcherDaemon, run_daemon
from mintburn_watch.errors import ConfigError, WatchError
from mintburn_watch.models.config import WatcherConfig


def _mask(secret: str) -> str:
    if not secret:
        return "(not set)"
    return f"{secret[:4]}***" if len(secret) > 8 else "***configured***"


def _load_valid_config(config_path: str | None) -> WatcherConfig:
    """Load config and exit with status 1 if it is unusable."""
    try:
        cfg = load_config(config_path)
        validate_config(cfg)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo("Set RPC_URL, TELEGRAM_TOKEN and TELEGRAM_CHAT_ID.", err=True)
        sys.exit(1)
    return cfg


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """mintburn-watch - relay ERC-20 mint and burn events to Telegram."""
    load_dotenv(find_dotenv(usecwd=True))
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    if verbose:
        level = logging.DEBUG
    else:
        try:
            level_name = load_config(config_path).log_level
        except ConfigError:
            level_name = "info"
        level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Daemon ─────────────────────────────────────────────


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Start watching for mint and burn events."""
    cfg = _load_valid_config(ctx.obj["config_path"])

    click.echo(
        f"Watching {cfg.token_address or 'all tokens'} on {cfg.network_name} "
        f"(source: {cfg.source.value}, confirmations: {cfg.confirmations})"
    )
    try:
        asyncio.run(run_daemon(cfg))
    except WatchError as exc:
        click.echo(f"Startup error: {exc}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Verify RPC connectivity and the Telegram bot token, then exit."""
    cfg = _load_valid_config(ctx.obj["config_path"])

    try:
        info = asyncio.run(WatcherDaemon(cfg).check())
    except WatchError as exc:
        click.echo(f"Startup check failed: {exc}", err=True)
        sys.exit(1)

    click.echo(f"RPC:        OK (best block {info.head})")
    click.echo(f"Telegram:   OK (@{info.bot_username})")


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the effective configuration."""
    try:
        cfg = load_config(ctx.obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Network:       {cfg.network_name}")
    click.echo(f"RPC URL:       {cfg.rpc_url or '(not set)'}")
    click.echo(f"WS URL:        {cfg.ws_url or '(not set)'}")
    click.echo(f"Source:        {cfg.source.value}")
    click.echo(f"Token:         {cfg.token_address or '(any)'}")
    click.echo(f"Confirmations: {cfg.confirmations}")
    click.echo(f"Explorer:      {cfg.explorer_url}")
    click.echo(f"Bot token:     {_mask(cfg.telegram_token)}")
    click.echo(f"Chat ID:       {cfg.telegram_chat_id or '(not set)'}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
