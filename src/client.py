"""Telegram client factory for linkfix.

We explicitly manage the client's lifecycle (start/run_until_disconnected)
so it is obvious when the session is created and when it ends. This avoids
implicit context-manager behavior for a long-running bot.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv
from telethon import TelegramClient, errors


@dataclass(frozen=True)
class TelegramCredentials:
    """Bot credentials captured once at startup."""

    api_id: int
    api_hash: str
    bot_token: str
    session_name: str


def load_credentials() -> TelegramCredentials:
    """Read API_ID/API_HASH/BOT_TOKEN via python-dotenv to keep secrets out of the repo.

    The session name defaults to "linkfix" to create a local .session file.
    """

    load_dotenv()

    api_id = os.getenv("API_ID")
    api_hash = os.getenv("API_HASH")
    bot_token = os.getenv("BOT_TOKEN")
    session_name = os.getenv("SESSION_NAME", "linkfix")

    # Fail fast on missing credentials instead of an ambiguous login prompt.
    if not api_id or not api_hash:
        raise RuntimeError("Missing API_ID or API_HASH in environment")
    if not bot_token:
        raise RuntimeError("Missing BOT_TOKEN in environment")
    try:
        api_id_value = int(api_id)
    except ValueError:
        raise RuntimeError(f"API_ID must be an integer, got {api_id!r}") from None

    return TelegramCredentials(
        api_id=api_id_value,
        api_hash=api_hash,
        bot_token=bot_token,
        session_name=session_name,
    )


def build_client(credentials: TelegramCredentials) -> TelegramClient:
    """Create a Telethon client; nothing is connected yet."""

    logging.getLogger(__name__).info("Initializing Telegram client")

    return TelegramClient(credentials.session_name, credentials.api_id, credentials.api_hash)


def start_bot(client: TelegramClient, credentials: TelegramCredentials) -> None:
    """Connect and sign in as the bot, turning any failure into a fatal RuntimeError."""

    try:
        client.start(bot_token=credentials.bot_token)
    except (OSError, errors.RPCError) as exc:
        raise RuntimeError(f"Failed to connect to Telegram: {exc}") from exc
