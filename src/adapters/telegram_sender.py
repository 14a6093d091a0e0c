"""Telegram delivery adapter.

Posts the rewritten links as a new plain-text message in the originating chat.
"""

from __future__ import annotations

from core.models import MessageContext


class TelegramChatSender:
    """Sender adapter that answers in the chat the links were posted in."""

    def __init__(self, client) -> None:
        self._client = client

    async def send(self, context: MessageContext, text: str) -> None:
        """Send the block as-is; parse_mode=None keeps Telethon from parsing markdown."""

        await self._client.send_message(context.chat_id, text, parse_mode=None)
