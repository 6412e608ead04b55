"""Daemon wiring, startup checks and the main loop."""

from __future__ import annotations

import pytest

from mintburn_watch.chain.subscription import SubscriptionSource
from mintburn_watch.daemon import WatcherDaemon
from mintburn_watch.errors import DispatchError, TransportError
from mintburn_watch.models.config import HeadSource

from tests.conftest import make_test_config, make_watcher
from tests.factories import make_mint_log
from tests.mocks import MockChain, MockFetcher, MockNotifier


class ScriptedSource:
    """Yields fixed heads, then stops the daemon."""

    def __init__(self, daemon: WatcherDaemon, heights: list[int]) -> None:
        self._daemon = daemon
        self._heights = heights

    async def heads(self):
        for height in self._heights:
            yield height
        await self._daemon.stop()


@pytest.fixture
def daemon():
    d = WatcherDaemon(make_test_config())
    d.chain = MockChain(head=500)
    d.notifier = MockNotifier()
    return d


async def test_check_reports_head_and_bot(daemon):
    info = await daemon.check()
    assert info.head == 500
    assert info.bot_username == "mock_bot"


async def test_check_fails_on_bad_rpc(daemon):
    daemon.chain.head_failures = 1
    with pytest.raises(TransportError):
        await daemon.check()


async def test_check_fails_on_bad_bot_token(daemon):
    daemon.notifier = MockNotifier(succeed=False)
    with pytest.raises(DispatchError):
        await daemon.check()


async def test_main_loop_runs_one_pass_per_head(daemon):
    fetcher = MockFetcher()
    notifier = MockNotifier()
    daemon.watcher = make_watcher(MockChain(head=500), fetcher, notifier)
    fetcher.enqueue(make_mint_log(block_number=101))
    daemon.source = ScriptedSource(daemon, [100, 101, 102])

    daemon._running = True
    await daemon._main_loop()

    assert fetcher.calls == [(100, 100), (101, 101), (102, 102)]
    assert len(notifier.sent) == 1


def test_subscribe_mode_uses_one_source_for_heads_and_logs():
    d = WatcherDaemon(make_test_config(source=HeadSource.SUBSCRIBE, ws_url="ws://127.0.0.1:8546"))
    assert isinstance(d.source, SubscriptionSource)
    assert d.watcher.fetcher is d.source
