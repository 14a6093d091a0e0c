"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MessageContext:
    """Minimal message context used by the core processing pipeline."""

    chat_id: int
    message_id: int
    text: str
    author_is_bot: bool
