"""Telegram Bot API client."""

import logging
from typing import Any, Optional

import httpx

from reads_bot.core import ChatTransport, Reply, TransportError

logger = logging.getLogger(__name__)


class TelegramClient(ChatTransport):
    """Minimal Bot API client: long polling and message rendering."""

    def __init__(self, token: str, timeout: float = 30.0) -> None:
        self.base_url = f"https://api.telegram.org/bot{token}"
        self.timeout = timeout

    async def _call(self, method: str, payload: dict[str, Any], timeout: Optional[float] = None) -> Any:
        """Invoke a Bot API method and return its ``result``."""
        async with httpx.AsyncClient(timeout=timeout or self.timeout) as client:
            try:
                response = await client.post(f"{self.base_url}/{method}", json=payload)
                data = response.json()
            except httpx.HTTPError as e:
                raise TransportError(f"Telegram {method} failed: {e}") from e
            except ValueError as e:
                raise TransportError(f"Telegram {method} returned non-JSON ({response.status_code})") from e

        if not data.get("ok"):
            raise TransportError(f"Telegram {method} error: {data.get('description', response.status_code)}")

        return data.get("result")

    async def get_updates(self, offset: Optional[int] = None, poll_timeout: int = 30) -> list[dict]:
        """Long-poll for new updates."""
        payload: dict[str, Any] = {
            "timeout": poll_timeout,
            "allowed_updates": ["message", "callback_query"],
        }
        if offset is not None:
            payload["offset"] = offset

        # HTTP timeout must outlast the long poll
        return await self._call("getUpdates", payload, timeout=poll_timeout + self.timeout) or []

    async def delete_webhook(self) -> None:
        """Polling and webhooks are mutually exclusive."""
        await self._call("deleteWebhook", {"drop_pending_updates": False})

    async def answer_callback_query(self, callback_query_id: str) -> None:
        await self._call("answerCallbackQuery", {"callback_query_id": callback_query_id})

    async def send_message(self, chat_id: int, reply: Reply) -> None:
        payload: dict[str, Any] = {"chat_id": chat_id, "text": reply.text}

        if reply.markdown:
            payload["parse_mode"] = "MarkdownV2"

        if reply.buttons:
            payload["reply_markup"] = {
                "inline_keyboard": [
                    [{"text": b.label, "callback_data": b.callback_data} for b in row]
                    for row in reply.buttons
                ]
            }

        await self._call("sendMessage", payload)

    async def send_replies(self, chat_id: int, replies: list[Reply]) -> None:
        for reply in replies:
            await self.send_message(chat_id, reply)
