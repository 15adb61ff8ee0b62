"""Shared pytest configuration for the expense tracker."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool


def _insert_repo_root() -> None:
    """Make sure the repository root is on ``sys.path`` for imports."""

    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_insert_repo_root()

from expenses.store import ExpenseStore  # noqa: E402

TODAY = date(2026, 10, 19)


def memory_engine() -> Engine:
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep configuration variables and logging handlers from leaking across tests."""

    for name in (
        "EXPENSES_DATABASE_URL",
        "EXPENSES_LOG_LEVEL",
        "EXPENSES_JSON_LOGS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("EXPENSES_LOG_DIR", str(tmp_path / "logs"))
    yield
    for logger in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger, logging.Logger) and logger.name.startswith("expenses"):
            for handler in logger.handlers:
                handler.close()
            logger.handlers = []
            logger.setLevel(logging.NOTSET)


@pytest.fixture()
def engine() -> Iterator[Engine]:
    test_engine = memory_engine()
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def store(engine: Engine) -> Iterator[ExpenseStore]:
    with ExpenseStore.connect(engine=engine, today=lambda: TODAY) as opened:
        yield opened


@pytest.fixture()
def today() -> date:
    return TODAY
