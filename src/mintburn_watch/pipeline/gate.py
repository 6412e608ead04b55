"""Confirmation gate: holds logs back until they are buried deep enough."""

from __future__ import annotations

import logging

from mintburn_watch.errors import TransportError
from mintburn_watch.interfaces.chain import ChainReader

log = logging.getLogger(__name__)


class ConfirmationGate:
    """Decides whether a log's block has ``confirmations`` blocks on top.

    A block counts as its own first confirmation, so with confirmations=3
    a log at block 100 becomes eligible once the head reaches 102.

    The chain head is queried at most once per pass (call ``reset()`` at
    the start of each pass). A failed head query leaves every gated log
    ineligible for the rest of the pass.
    """

    def __init__(self, chain: ChainReader, confirmations: int = 1) -> None:
        self._chain = chain
        self._confirmations = confirmations
        self._head: int | None = None
        self._head_checked = False

    @property
    def confirmations(self) -> int:
        return self._confirmations

    def reset(self) -> None:
        self._head = None
        self._head_checked = False

    async def _current_head(self) -> int | None:
        if not self._head_checked:
            self._head_checked = True
            try:
                self._head = await self._chain.block_number()
            except TransportError as exc:
                log.warning("Chain head query failed, deferring gated logs: %s", exc)
                self._head = None
        return self._head

    async def is_eligible(self, block_number: int) -> bool:
        if self._confirmations <= 1:
            return True
        head = await self._current_head()
        if head is None:
            return False
        return block_number + self._confirmations - 1 <= head
