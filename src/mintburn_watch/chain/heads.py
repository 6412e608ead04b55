"""Polling head source: emits the chain head whenever it moves."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator

from mintburn_watch.errors import TransportError
from mintburn_watch.interfaces.chain import ChainReader

log = logging.getLogger(__name__)


class HeadPoller:
    """Polls eth_blockNumber every ``poll_interval`` seconds.

    Yields the new height each time it increases. Transport failures are
    logged and the next poll is attempted after ``error_backoff``.
    """

    def __init__(
        self,
        chain: ChainReader,
        poll_interval: float = 2.0,
        error_backoff: float = 5.0,
    ) -> None:
        self._chain = chain
        self._poll_interval = poll_interval
        self._error_backoff = error_backoff
        self._last: int | None = None

    async def heads(self) -> AsyncIterator[int]:
        while True:
            try:
                height = await self._chain.block_number()
            except TransportError as exc:
                log.warning("Head poll failed: %s", exc)
                await asyncio.sleep(self._error_backoff)
                continue

            if self._last is None or height > self._last:
                self._last = height
                yield height
            await asyncio.sleep(self._poll_interval)
