"""Shared fixtures for mintburn_watch tests."""

from __future__ import annotations

import pytest

from mintburn_watch.chain.metadata import TokenMetadataResolver
from mintburn_watch.models.config import WatcherConfig
from mintburn_watch.pipeline.dedup import Deduplicator
from mintburn_watch.pipeline.gate import ConfirmationGate
from mintburn_watch.pipeline.watcher import MintBurnWatcher
from mintburn_watch.retry import RetryPolicy

from tests.mocks import MockChain, MockFetcher, MockNotifier

NO_DELAY = RetryPolicy(retries=2, factor=1.5, min_delay=0)


def make_test_config(**overrides) -> WatcherConfig:
    """Build a WatcherConfig suitable for testing."""
    defaults = dict(
        poll_interval=0.01,
        error_backoff=0.01,
        rpc_url="http://127.0.0.1:8545",
        telegram_token="123456:TEST-TOKEN",
        telegram_chat_id="-100123",
        confirmations=1,
        retry_min_delay=0,
    )
    defaults.update(overrides)
    return WatcherConfig(**defaults)


def make_watcher(
    chain: MockChain,
    fetcher: MockFetcher,
    notifier: MockNotifier,
    confirmations: int = 1,
    dedup: Deduplicator | None = None,
) -> MintBurnWatcher:
    return MintBurnWatcher(
        fetcher=fetcher,
        notifier=notifier,
        metadata=TokenMetadataResolver(chain, NO_DELAY),
        gate=ConfirmationGate(chain, confirmations),
        dedup=dedup,
    )


@pytest.fixture
def test_config():
    return make_test_config()


@pytest.fixture
def mock_chain():
    return MockChain(head=100)


@pytest.fixture
def mock_fetcher():
    return MockFetcher()


@pytest.fixture
def mock_notifier():
    return MockNotifier(succeed=True)


@pytest.fixture
def watcher(mock_chain, mock_fetcher, mock_notifier):
    """MintBurnWatcher with mocked collaborators, no confirmation gating."""
    return make_watcher(mock_chain, mock_fetcher, mock_notifier)
