"""Core message processing pipeline.

This module is integration-agnostic. It only relies on ports for validation
and delivery, enabling other chat platforms or HTTP clients without changes here.
"""

from __future__ import annotations

import logging

from core.links import extract_urls, has_link_candidates, rewrite_urls
from core.models import MessageContext
from core.ports import SenderPort, ValidatorPort

LOGGER = logging.getLogger(__name__)


class LinkFixProcessor:
    """Orchestrates extraction, validation, rewriting, and delivery."""

    def __init__(self, validator: ValidatorPort, sender: SenderPort) -> None:
        self._validator = validator
        self._sender = sender

    async def handle(self, context: MessageContext) -> None:
        """Process one message context through the core pipeline."""

        # Bot-authored messages are never answered, so two link bots in the
        # same chat cannot feed each other.
        if context.author_is_bot:
            return

        if not has_link_candidates(context.text):
            return

        urls = extract_urls(context.text)
        valid_urls = await self._validator.validate(urls)
        block = rewrite_urls(valid_urls)
        if not block:
            LOGGER.debug(
                "Nothing to send for message %s in chat %s (%s candidate(s))",
                context.message_id,
                context.chat_id,
                len(urls),
            )
            return

        try:
            await self._sender.send(context, block)
        except Exception:
            # Delivery failures are not retried; the next message starts clean.
            LOGGER.exception("Error sending message to chat %s", context.chat_id)
            return

        LOGGER.info(
            "Rewrote %s link(s) for message %s in chat %s",
            block.count("\n"),
            context.message_id,
            context.chat_id,
        )
