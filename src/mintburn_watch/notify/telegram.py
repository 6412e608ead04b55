"""Telegram Bot API notifier over httpx."""

from __future__ import annotations

import logging

import httpx

from mintburn_watch.errors import DispatchError

log = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"


class TelegramNotifier:
    """Sends Markdown messages to one chat via the Bot API.

    Uses:
    - getMe: verify the bot token at startup
    - sendMessage: deliver an alert
    """

    def __init__(
        self,
        token: str,
        chat_id: str,
        api_url: str = TELEGRAM_API_URL,
        timeout: float = 15.0,
    ) -> None:
        self._token = token
        self._chat_id = chat_id
        self._base_url = api_url.rstrip("/")
        self._timeout = timeout

    def _url(self, method: str) -> str:
        return f"{self._base_url}/bot{self._token}/{method}"

    async def _request(self, method: str, payload: dict | None = None) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._url(method), json=payload or {})
                data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise DispatchError(f"telegram {method} failed: {exc}") from exc

        if not data.get("ok"):
            raise DispatchError(
                f"telegram {method} rejected (HTTP {resp.status_code}): "
                f"{data.get('description', 'unknown error')}"
            )
        return data.get("result", {})

    async def get_me(self) -> str:
        result = await self._request("getMe")
        return str(result.get("username", ""))

    async def send(self, text: str) -> None:
        await self._request(
            "sendMessage",
            {
                "chat_id": self._chat_id,
                "text": text,
                "parse_mode": "Markdown",
                "disable_web_page_preview": True,
            },
        )
        log.debug("Sent message to chat %s", self._chat_id)
