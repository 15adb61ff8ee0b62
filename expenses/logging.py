"""Structured logging helpers for the expense tracker."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Final

from expenses import config

CONSOLE_FORMAT: Final[str] = "[%(levelname)s] %(name)s: %(message)s"
LOG_FILENAME: Final[str] = "expenses.log"
ROOT_LOGGER: Final[str] = "expenses"


class JsonAuditFormatter(logging.Formatter):
    """Format log records as single-line JSON payloads."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        payload = {
            "timestamp": timestamp,
            "level": record.levelname,
            "source": record.name,
            "message": record.getMessage(),
            "expense_id": _coerce_int(getattr(record, "expense_id", None)),
            "rows_affected": _coerce_int(getattr(record, "rows_affected", None)),
        }
        return json.dumps(payload, ensure_ascii=False)


def _coerce_int(value: object) -> int | None:
    if value is None:
        return None
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None


def _resolve_level(level: str | int | None) -> int:
    """Pick the log level from the argument or the environment."""

    if isinstance(level, int):
        return level
    candidate = level.strip().upper() if isinstance(level, str) else config.log_level_name()
    resolved = logging.getLevelName(candidate)
    return int(resolved) if isinstance(resolved, int) else logging.INFO


def log_path() -> Path:
    return config.log_dir() / LOG_FILENAME


def _ensure_console_handler(logger: logging.Logger, level: int) -> None:
    for handler in logger.handlers:
        if getattr(handler, "_expenses_console", False):
            handler.setLevel(level)
            return
    # StreamHandler defaults to stderr, stdout stays reserved for command output.
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    stream_handler._expenses_console = True  # type: ignore[attr-defined]
    logger.addHandler(stream_handler)


def _ensure_json_handler(logger: logging.Logger, level: int) -> None:
    for handler in logger.handlers:
        if getattr(handler, "_expenses_json", False):
            handler.setLevel(level)
            return
    path = log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    json_handler = logging.FileHandler(path, encoding="utf-8")
    json_handler.setLevel(level)
    json_handler.setFormatter(JsonAuditFormatter())
    json_handler._expenses_json = True  # type: ignore[attr-defined]
    logger.addHandler(json_handler)


def setup_logger(
    name: str = ROOT_LOGGER,
    json_format: bool = False,
    level: str | int | None = None,
) -> logging.Logger:
    """Configure and return a logger with console and optional JSON handlers.

    Calling it repeatedly for the same name reuses the existing handlers.
    """

    resolved_level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(resolved_level)
    # Keep propagation so capture handlers (pytest caplog) still see records.
    logger.propagate = True
    _ensure_console_handler(logger, resolved_level)
    if json_format or config.json_logs_enabled():
        _ensure_json_handler(logger, resolved_level)
    return logger


def configure_cli_logging(level: str | int | None = None) -> logging.Logger:
    """Configure the package logger for a CLI invocation."""

    return setup_logger(ROOT_LOGGER, json_format=config.json_logs_enabled(), level=level)


__all__ = ["JsonAuditFormatter", "configure_cli_logging", "log_path", "setup_logger"]
