"""Application entry point for the linkfix bot."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from telethon import events

import settings
from adapters.http_validator import HttpLinkValidator
from adapters.telegram_mapper import build_context
from adapters.telegram_sender import TelegramChatSender
from client import build_client, load_credentials, start_bot
from core.config import ValidationConfig
from core.ports import ValidatorPort
from core.processor import LinkFixProcessor
from core.validation import PassThroughValidator

NAME = "LINKFIX"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


# Secrets that always end up masked, on top of any extra names in config.json.
DEFAULT_REDACTED_ENV = ("BOT_TOKEN", "API_HASH")

# Telethon logs every reconnect at INFO; link validation failures are WARNING.
DEFAULT_LOGGER_LEVELS = {
    "telethon": "WARNING",
    "adapters.http_validator": "WARNING",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _level(name, default: int = logging.INFO) -> int:
    return getattr(logging, str(name).upper(), default)


class _RedactingFormatter(logging.Formatter):
    """Masks bot credentials, including inside formatted tracebacks."""

    MASK = "***"

    def __init__(self, secrets: list[str], fmt: str = LOG_FORMAT, datefmt: Optional[str] = LOG_DATEFMT) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        for secret in self._secrets:
            text = text.replace(secret, self.MASK)
        return text


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", True):
        return []
    names = set(DEFAULT_REDACTED_ENV) | set(redact_cfg.get("patterns", []))
    values = {os.getenv(name) for name in names}
    # Longest first so a secret containing another is masked whole.
    return sorted((value for value in values if value), key=len, reverse=True)


def _file_handler(file_cfg: dict) -> RotatingFileHandler:
    path = file_cfg.get("path", "logs/linkfix.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging(config: dict) -> None:
    """Set up root handlers and per-logger levels from the config "logging" section."""

    if not config.get("enabled", False):
        return

    load_dotenv()
    level = _level(config.get("level", "INFO"))
    formatter = _RedactingFormatter(_collect_redaction_values(config))

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_file_handler(file_cfg))
    if not handlers:
        return

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)

    logger_levels = dict(DEFAULT_LOGGER_LEVELS)
    logger_levels.update(config.get("loggers", {}))
    for name, logger_level in logger_levels.items():
        logging.getLogger(name).setLevel(_level(logger_level, level))


def _build_validator(config: ValidationConfig) -> ValidatorPort:
    if config.skip:
        return PassThroughValidator()
    return HttpLinkValidator(timeout_seconds=config.timeout_seconds)


def _run(skip_validation: bool) -> None:
    _print_banner()
    app_settings = settings.load_settings()
    _configure_logging(app_settings.logging)
    logger = logging.getLogger(__name__)

    logger.info("Starting linkfix")

    validation_config = ValidationConfig(
        skip=skip_validation,
        timeout_seconds=app_settings.validation_timeout_seconds,
    )
    if validation_config.skip:
        logger.info("Link validation is disabled")
    else:
        logger.info("Link validation is enabled (timeout %ss)", validation_config.timeout_seconds)

    credentials = load_credentials()
    client = build_client(credentials)
    start_bot(client, credentials)
    me = client.loop.run_until_complete(client.get_me())
    logger.info("%s is connected!", me.username)

    validator = _build_validator(validation_config)
    processor = LinkFixProcessor(validator=validator, sender=TelegramChatSender(client))

    # Single handler keeps Telethon integration minimal and defers all filtering
    # to our core processor for consistency and testability.
    @client.on(events.NewMessage(incoming=True))
    async def handler(event) -> None:
        try:
            context = await build_context(event.message)
            await processor.handle(context)
        except Exception:
            logger.exception("Error while processing message")

    logger.info("Listening for incoming messages...")
    try:
        client.run_until_disconnected()
    finally:
        if isinstance(validator, HttpLinkValidator):
            client.loop.run_until_complete(validator.close())


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="linkfix",
        description="Reply to Twitter/X links with fxtwitter/fixvx links.",
    )
    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Rewrite links without checking that they are reachable first.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)
    try:
        _run(skip_validation=args.skip_validation)
    except RuntimeError as exc:
        # Only startup problems (config, credentials, connection) reach this point.
        raise SystemExit(f"linkfix: {exc}") from exc


if __name__ == "__main__":
    main()
