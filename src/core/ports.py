"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for validation and delivery adapters so
that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence

from core.models import MessageContext


class ValidatorPort(Protocol):
    """Filters candidate URLs down to the ones worth rewriting."""

    async def validate(self, urls: Sequence[str]) -> List[str]:
        ...


class SenderPort(Protocol):
    """Delivers the rewritten block back to the originating chat."""

    async def send(self, context: MessageContext, text: str) -> None:
        ...
