"""Environment-driven configuration for the expense tracker."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

DATABASE_URL_ENV: Final[str] = "EXPENSES_DATABASE_URL"
LEVEL_ENV_FLAG: Final[str] = "EXPENSES_LOG_LEVEL"
JSON_ENV_FLAG: Final[str] = "EXPENSES_JSON_LOGS"
LOG_DIR_ENV: Final[str] = "EXPENSES_LOG_DIR"

# libpq fills in host, user and password from PGHOST/PGUSER/PGPASSWORD.
DEFAULT_DATABASE_URL: Final[str] = "postgresql+psycopg2:///expenses"
DEFAULT_LOG_LEVEL: Final[str] = "ERROR"
DEFAULT_LOG_DIR: Final[Path] = Path("artifacts") / "logs"

_TRUTHY = {"1", "true", "yes", "on"}


def database_url() -> str:
    """Return the SQLAlchemy URL of the expenses database."""

    value = os.environ.get(DATABASE_URL_ENV, "").strip()
    return value or DEFAULT_DATABASE_URL


def log_level_name() -> str:
    """Return the configured log level name, upper-cased."""

    value = os.environ.get(LEVEL_ENV_FLAG, "").strip().upper()
    return value or DEFAULT_LOG_LEVEL


def json_logs_enabled() -> bool:
    value = os.environ.get(JSON_ENV_FLAG)
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def log_dir() -> Path:
    value = os.environ.get(LOG_DIR_ENV, "").strip()
    return Path(value) if value else DEFAULT_LOG_DIR


__all__ = [
    "DATABASE_URL_ENV",
    "DEFAULT_DATABASE_URL",
    "JSON_ENV_FLAG",
    "LEVEL_ENV_FLAG",
    "LOG_DIR_ENV",
    "database_url",
    "json_logs_enabled",
    "log_dir",
    "log_level_name",
]
