"""Retry-with-backoff policy for fallible chain calls."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from mintburn_watch.errors import TransportError

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retries a coroutine factory on TransportError.

    ``retries`` counts additional attempts, so retries=2 means at most three
    calls. The delay before retry n (1-based) is ``min_delay * factor ** (n-1)``.
    """

    retries: int = 2
    factor: float = 1.5
    min_delay: float = 1.0

    def delay(self, retry_number: int) -> float:
        return self.min_delay * self.factor ** (retry_number - 1)

    async def run(self, call: Callable[[], Awaitable[T]], what: str = "call") -> T:
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await call()
            except TransportError as exc:
                if attempt >= attempts:
                    log.warning("%s failed after %d attempts: %s", what, attempts, exc)
                    raise
                delay = self.delay(attempt)
                log.debug(
                    "%s failed (attempt %d/%d), retrying in %.2fs: %s",
                    what, attempt, attempts, delay, exc,
                )
                await asyncio.sleep(delay)
        raise AssertionError("unreachable")
