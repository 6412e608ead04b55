"""Main daemon loop - wires all components together."""

from __future__ import annotations

import asyncio
import logging
import signal
from dataclasses import dataclass

from mintburn_watch.chain.fetcher import RpcLogFetcher
from mintburn_watch.chain.heads import HeadPoller
from mintburn_watch.chain.metadata import TokenMetadataResolver
from mintburn_watch.chain.rpc import Web3ChainClient
from mintburn_watch.chain.subscription import SubscriptionSource
from mintburn_watch.interfaces.heads import BlockSource
from mintburn_watch.models.config import HeadSource, WatcherConfig
from mintburn_watch.notify.telegram import TelegramNotifier
from mintburn_watch.pipeline.dedup import Deduplicator
from mintburn_watch.pipeline.gate import ConfirmationGate
from mintburn_watch.pipeline.watcher import MintBurnWatcher
from mintburn_watch.retry import RetryPolicy

log = logging.getLogger(__name__)


@dataclass
class StartupInfo:
    """What the startup checks found."""

    head: int
    bot_username: str


class WatcherDaemon:
    """Long-running mint/burn watcher.

    Feeds heads from the configured source into the pipeline, one pass
    at a time, until stopped.
    """

    def __init__(self, cfg: WatcherConfig) -> None:
        self._cfg = cfg
        self._running = False

        self.chain = Web3ChainClient(cfg.rpc_url)
        self.notifier = TelegramNotifier(cfg.telegram_token, cfg.telegram_chat_id)

        self.source: BlockSource
        if cfg.source == HeadSource.SUBSCRIBE:
            subscription = SubscriptionSource(cfg.ws_url, cfg.token_address)
            self.source = subscription
            fetcher = subscription
        else:
            self.source = HeadPoller(self.chain, cfg.poll_interval, cfg.error_backoff)
            fetcher = RpcLogFetcher(self.chain, cfg.token_address)

        retry = RetryPolicy(
            retries=cfg.metadata_retries,
            factor=cfg.retry_factor,
            min_delay=cfg.retry_min_delay,
        )
        self.watcher = MintBurnWatcher(
            fetcher=fetcher,
            notifier=self.notifier,
            metadata=TokenMetadataResolver(self.chain, retry),
            gate=ConfirmationGate(self.chain, cfg.confirmations),
            dedup=Deduplicator(cfg.dedup_capacity, cfg.dedup_evict),
            network_name=cfg.network_name,
            explorer_url=cfg.explorer_url,
        )

    async def check(self) -> StartupInfo:
        """Verify chain connectivity and the bot credential.

        Raises TransportError or DispatchError on failure.
        """
        head = await self.chain.block_number()
        log.info("Connected to %s RPC, best block: %d", self._cfg.network_name, head)
        username = await self.notifier.get_me()
        log.info("Telegram bot: %s", username)
        return StartupInfo(head=head, bot_username=username)

    async def start(self) -> None:
        """Run startup checks, then the main loop."""
        log.info("Starting mintburn_watch daemon")
        log.info("  Network: %s", self._cfg.network_name)
        log.info("  RPC: %s", self._cfg.rpc_url)
        log.info("  Source: %s", self._cfg.source.value)
        log.info("  Token: %s", self._cfg.token_address or "(any)")
        log.info("  Confirmations: %d", self._cfg.confirmations)

        await self.check()

        self._running = True
        try:
            await self._main_loop()
        finally:
            log.info("Daemon shut down cleanly")

    async def stop(self) -> None:
        """Signal the daemon to stop after the current pass."""
        log.info("Stop requested")
        self._running = False

    async def _main_loop(self) -> None:
        """Consume heads and run one pipeline pass per head."""
        while self._running:
            try:
                async for head in self.source.heads():
                    if not self._running:
                        break
                    await self.watcher.on_block(head)
            except asyncio.CancelledError:
                log.info("Main loop cancelled")
                break
            except Exception as exc:
                log.error("Head source error: %s", exc, exc_info=True)
                await asyncio.sleep(self._cfg.error_backoff)


async def run_daemon(cfg: WatcherConfig) -> None:
    """Entry point for running the daemon."""
    daemon = WatcherDaemon(cfg)

    loop = asyncio.get_running_loop()
    main_task = asyncio.current_task()

    def _signal_handler():
        asyncio.ensure_future(daemon.stop())
        # The head source may be blocked waiting on the network.
        if main_task is not None:
            main_task.cancel()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    try:
        await daemon.start()
    except asyncio.CancelledError:
        log.info("Daemon cancelled")

