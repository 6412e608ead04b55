"""Notifier protocol - delivers a formatted alert to the messaging channel."""

from __future__ import annotations

from typing import Protocol


class Notifier(Protocol):
    """Outbound messaging channel."""

    async def send(self, text: str) -> None:
        """Deliver one message. Raises DispatchError on failure."""
        ...

    async def get_me(self) -> str:
        """Return the bot's username. Raises DispatchError on failure."""
        ...
