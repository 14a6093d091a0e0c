"""Static configuration for linkfix.

Non-secret settings (validation, logging) live in an optional config.json at
the project root. Secrets stay in the environment, see client.py.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")

DEFAULT_VALIDATION_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class Settings:
    """Settings read once by app.py at startup."""

    # Upper bound for a single reachability check. Whether checks run at all
    # is a command line switch (--skip-validation), not a config entry.
    validation_timeout_seconds: float = DEFAULT_VALIDATION_TIMEOUT_SECONDS
    logging: dict = field(default_factory=dict)


def _load_json_config(path: str) -> dict:
    """Load config.json; a missing file means every setting keeps its default."""

    if not os.path.exists(path):
        return {}

    try:
        with open(path, "r", encoding="utf-8") as handle:
            config = json.load(handle)
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(config, dict):
        raise RuntimeError(f"Config file {path} must contain a JSON object")
    return config


def _parse_timeout(raw) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        raise RuntimeError(f"validation.timeout_seconds must be a number, got {raw!r}") from None
    if timeout <= 0:
        raise RuntimeError(f"validation.timeout_seconds must be positive, got {raw!r}")
    return timeout


def load_settings(path: str = CONFIG_PATH) -> Settings:
    """Build Settings from config.json, raising RuntimeError on bad content."""

    config = _load_json_config(path)
    validation = config.get("validation") or {}
    return Settings(
        validation_timeout_seconds=_parse_timeout(
            validation.get("timeout_seconds", DEFAULT_VALIDATION_TIMEOUT_SECONDS)
        ),
        logging=config.get("logging") or {},
    )
