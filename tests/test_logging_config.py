from __future__ import annotations

import json
import logging
import logging.handlers
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, cast

import pytest

from tipsplit.logging_config import (
    HumanReadableFormatter,
    JSONFormatter,
    get_log_format_from_env,
    get_log_level_from_env,
    get_logger,
    setup_logging,
)


@contextmanager
def preserved_root_logging() -> Iterator[logging.Logger]:
    """Restore the root logger's handlers and level after reconfiguring it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        for handler in list(root.handlers):
            if handler not in handlers:
                handler.close()
            root.removeHandler(handler)
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TIPSPLIT_LOG_LEVEL", "TIPSPLIT_LOG_FORMAT", "TIPSPLIT_LOG_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _make_record(**extra: Any) -> logging.LogRecord:
    record = logging.LogRecord(
        name="tipsplit.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Committed %s",
        args=("bill",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_setup_logging_writes_json_file(tmp_path: Path) -> None:
    """Ensure logging setup adds JSON console output and a rotating file handler."""
    log_path = tmp_path / "logs" / "app.log"
    with preserved_root_logging() as root:
        setup_logging(
            level=logging.DEBUG,
            format_type="json",
            log_file=log_path,
            include_context=True,
        )
        handlers = list(root.handlers)
        console_handler = next(
            handler
            for handler in handlers
            if type(handler) is logging.StreamHandler
        )
        file_handler = next(
            handler
            for handler in handlers
            if isinstance(handler, logging.handlers.RotatingFileHandler)
        )

        assert isinstance(console_handler.formatter, JSONFormatter)
        assert isinstance(file_handler.formatter, JSONFormatter)
        logging.getLogger("tipsplit.test").info("hello test", extra={"field": "bill"})

        file_handler.flush()
        contents = log_path.read_text(encoding="utf-8")
        records = [json.loads(line) for line in contents.splitlines() if line.strip()]
        record = next(r for r in records if r.get("message") == "hello test")
        assert record["level"] == "INFO"
        assert record["field"] == "bill"


def test_setup_logging_without_console_keeps_screen_clean(tmp_path: Path) -> None:
    """The terminal UI logs to a file only."""
    log_path = tmp_path / "tui.log"
    with preserved_root_logging() as root:
        setup_logging(log_file=log_path, console=False)
        assert not any(type(h) is logging.StreamHandler for h in root.handlers)
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)


def test_setup_logging_without_outputs_installs_null_handler() -> None:
    with preserved_root_logging() as root:
        setup_logging(console=False)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.NullHandler)


def test_setup_logging_reads_log_file_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    log_path = tmp_path / "env.log"
    monkeypatch.setenv("TIPSPLIT_LOG_FILE", str(log_path))
    with preserved_root_logging() as root:
        setup_logging(console=False)
        file_handler = next(
            h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        )
        assert Path(file_handler.baseFilename) == log_path


@pytest.mark.parametrize(
    "format_type,formatter_type",
    [("human", HumanReadableFormatter), ("simple", logging.Formatter)],
)
def test_setup_logging_console_formats(format_type: str, formatter_type: type) -> None:
    with preserved_root_logging() as root:
        setup_logging(format_type=format_type)
        console_handler = next(h for h in root.handlers if type(h) is logging.StreamHandler)
        assert type(console_handler.formatter) is formatter_type


def test_log_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_log_level_from_env() == logging.INFO
    monkeypatch.setenv("LOG_LEVEL", "warn")
    assert get_log_level_from_env() == logging.WARNING
    monkeypatch.setenv("TIPSPLIT_LOG_LEVEL", "debug")
    assert get_log_level_from_env() == logging.DEBUG
    monkeypatch.setenv("TIPSPLIT_LOG_LEVEL", "chatty")
    assert get_log_level_from_env() == logging.INFO


def test_log_format_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_log_format_from_env() == "human"
    monkeypatch.setenv("TIPSPLIT_LOG_FORMAT", "JSON")
    assert get_log_format_from_env() == "json"


def test_json_formatter_includes_extra_fields() -> None:
    payload = json.loads(JSONFormatter().format(_make_record(field="people")))
    assert payload["message"] == "Committed bill"
    assert payload["logger"] == "tipsplit.test"
    assert payload["field"] == "people"
    assert payload["line"] == 10
    assert payload["timestamp"].endswith("Z")


def test_json_formatter_without_context() -> None:
    payload = json.loads(JSONFormatter(include_context=False).format(_make_record()))
    assert "module" not in payload
    assert "function" not in payload


def test_human_formatter_plain_output() -> None:
    output = HumanReadableFormatter().format(_make_record())
    assert output.startswith("[INFO] ")
    assert output.endswith("tipsplit.test - Committed bill")
    assert "\033[" not in output


def test_get_logger_with_extra_returns_adapter() -> None:
    adapter = get_logger("tipsplit.orchestrator", extra={"field": "bill"})
    assert isinstance(adapter, logging.LoggerAdapter)
    extra = cast(Mapping[str, Any], adapter.extra)
    assert extra["field"] == "bill"


def test_get_logger_without_extra_returns_logger() -> None:
    assert isinstance(get_logger("tipsplit.state"), logging.Logger)
