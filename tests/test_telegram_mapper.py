from __future__ import annotations

import asyncio

from adapters.telegram_mapper import build_context


class DummySender:
    def __init__(self, bot: bool) -> None:
        self.bot = bot


class DummyChannel:
    """Channel entities carry no bot attribute at all."""

    title = "news"


class DummyMessage:
    def __init__(self, *, chat_id: int, message_id: int, text: "str | None", sender=None) -> None:
        self.chat_id = chat_id
        self.id = message_id
        self.raw_text = text
        self._sender = sender

    async def get_sender(self):
        return self._sender


def test_build_context_copies_routing_fields() -> None:
    message = DummyMessage(
        chat_id=-100123,
        message_id=10,
        text="https://x.com/test",
        sender=DummySender(bot=False),
    )
    context = asyncio.run(build_context(message))
    assert context.chat_id == -100123
    assert context.message_id == 10
    assert context.text == "https://x.com/test"
    assert context.author_is_bot is False


def test_build_context_flags_bot_authors() -> None:
    message = DummyMessage(chat_id=1, message_id=2, text="hi", sender=DummySender(bot=True))
    context = asyncio.run(build_context(message))
    assert context.author_is_bot is True


def test_build_context_unknown_sender_is_not_a_bot() -> None:
    message = DummyMessage(chat_id=1, message_id=2, text="hi", sender=None)
    assert asyncio.run(build_context(message)).author_is_bot is False

    message = DummyMessage(chat_id=1, message_id=3, text="hi", sender=DummyChannel())
    assert asyncio.run(build_context(message)).author_is_bot is False


def test_build_context_media_only_message_has_empty_text() -> None:
    message = DummyMessage(chat_id=1, message_id=2, text=None, sender=DummySender(bot=False))
    assert asyncio.run(build_context(message)).text == ""
