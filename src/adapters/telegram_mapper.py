"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the core pipeline.
"""

from __future__ import annotations

from telethon.tl.custom import Message

from core.models import MessageContext


async def _author_is_bot(message: Message) -> bool:
    # get_sender() may hit the network when the entity is not cached; an
    # unknown sender (e.g. anonymous channel posts) is treated as a human.
    sender = await message.get_sender()
    return bool(getattr(sender, "bot", False))


async def build_context(message: Message) -> MessageContext:
    """Build a core MessageContext from a Telethon Message."""

    return MessageContext(
        chat_id=message.chat_id,
        message_id=message.id,
        # Media-only messages have no raw text.
        text=message.raw_text or "",
        author_is_bot=await _author_is_bot(message),
    )
