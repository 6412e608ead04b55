"""EVM chain access: log filters, RPC client, fetchers and head sources."""

from mintburn_watch.chain.fetcher import RpcLogFetcher
from mintburn_watch.chain.filter import TRANSFER_TOPIC, ZERO_ADDRESS, build_log_filter
from mintburn_watch.chain.heads import HeadPoller
from mintburn_watch.chain.metadata import TokenMetadataResolver
from mintburn_watch.chain.rpc import Web3ChainClient
from mintburn_watch.chain.subscription import SubscriptionSource

__all__ = [
    "RpcLogFetcher",
    "TRANSFER_TOPIC", "ZERO_ADDRESS", "build_log_filter",
    "HeadPoller",
    "TokenMetadataResolver",
    "Web3ChainClient",
    "SubscriptionSource",
]
