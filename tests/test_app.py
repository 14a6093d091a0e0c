from __future__ import annotations

import logging

import pytest

import app
import settings
from adapters.http_validator import HttpLinkValidator
from core.config import ValidationConfig
from core.validation import PassThroughValidator


def test_parse_args_defaults_to_validation() -> None:
    assert app._parse_args([]).skip_validation is False
    assert app._parse_args(["--skip-validation"]).skip_validation is True


def test_build_validator_follows_skip_flag() -> None:
    skipped = app._build_validator(ValidationConfig(skip=True, timeout_seconds=5))
    checked = app._build_validator(ValidationConfig(skip=False, timeout_seconds=5))
    assert isinstance(skipped, PassThroughValidator)
    assert isinstance(checked, HttpLinkValidator)


def test_redacting_formatter_masks_secrets() -> None:
    formatter = app._RedactingFormatter(["123:abcdef"], fmt="%(message)s")
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "token=%s", ("123:abcdef",), None)
    assert formatter.format(record) == "token=***"


def test_collect_redaction_values_reads_named_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("API_HASH", "123:abcdef")
    config = {"redact": {"enabled": True, "patterns": ["BOT_TOKEN", "API_HASH"]}}
    assert app._collect_redaction_values(config) == ["123:abcdef", "123:abc"]
    assert app._collect_redaction_values({"redact": {"enabled": False}}) == []


def test_main_exits_with_diagnostic_on_startup_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(skip_validation: bool) -> None:
        raise RuntimeError("Missing BOT_TOKEN in environment")

    monkeypatch.setattr(app, "_run", _fail)

    with pytest.raises(SystemExit) as excinfo:
        app.main(["--skip-validation"])
    assert str(excinfo.value) == "linkfix: Missing BOT_TOKEN in environment"


def test_bot_credentials_are_redacted_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.delenv("API_HASH", raising=False)
    assert app._collect_redaction_values({}) == ["123:abc"]


def test_configure_logging_applies_per_logger_levels(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app, "load_dotenv", lambda: None)
    names = ("telethon", "adapters.http_validator")
    previous = {name: logging.getLogger(name).level for name in names}
    try:
        app._configure_logging(
            {"enabled": True, "console": True, "loggers": {"adapters.http_validator": "DEBUG"}}
        )
        assert logging.getLogger("telethon").level == logging.WARNING
        assert logging.getLogger("adapters.http_validator").level == logging.DEBUG
    finally:
        for name, level in previous.items():
            logging.getLogger(name).setLevel(level)


def test_disabled_logging_leaves_levels_alone() -> None:
    before = logging.getLogger("telethon").level
    app._configure_logging({"enabled": False, "loggers": {"telethon": "DEBUG"}})
    assert logging.getLogger("telethon").level == before


def test_main_exits_with_diagnostic_on_bad_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json")
    monkeypatch.setattr(app, "_print_banner", lambda: None)
    load_settings = settings.load_settings
    monkeypatch.setattr(app.settings, "load_settings", lambda: load_settings(str(path)))

    with pytest.raises(SystemExit) as excinfo:
        app.main([])
    assert str(excinfo.value).startswith("linkfix: Cannot read config file")
