"""Data-access layer for expenses.

:class:`ExpenseStore` owns a single engine and session for the lifetime of a
command. It bootstraps the schema on connect and exposes the create, list,
search and delete operations, returning :class:`~expenses.schemas.ExpenseRecord`
values rather than live ORM rows.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from types import TracebackType

from pydantic import ValidationError
from sqlalchemy import Engine, delete, func, select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from . import database, models, schemas
from .errors import ConnectionFailure, ConstraintViolation

LOG = logging.getLogger(__name__)


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ExpenseStore:
    """Persistence operations over the ``expenses`` table."""

    def __init__(
        self,
        session: Session,
        *,
        engine: Engine | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._session = session
        self._engine = engine
        self._today = today

    @classmethod
    def connect(
        cls,
        url: str | None = None,
        *,
        engine: Engine | None = None,
        today: Callable[[], date] = date.today,
    ) -> ExpenseStore:
        """Open the database and make sure the expenses table exists.

        Args:
            url: SQLAlchemy URL; defaults to the configured database.
            engine: Pre-built engine to use instead of ``url``. The store does
                not dispose an engine it did not create.
            today: Clock used to stamp new expenses.

        Returns:
            A connected store, usable as a context manager.

        Raises:
            ConnectionFailure: If the database is unreachable or the schema
                cannot be created.
        """

        owned = engine is None
        bound: Engine | None = engine
        try:
            if bound is None:
                bound = database.make_engine(url)
            created = database.init_db(bound)
            session = database.make_sessionmaker(bound)()
        except SQLAlchemyError as exc:
            if owned and bound is not None:
                bound.dispose()
            LOG.warning("Unable to open the expenses database: %s", exc)
            raise ConnectionFailure(f"Unable to open the expenses database: {exc}") from exc
        if created:
            LOG.info("Expenses table created")
        store = cls(session, engine=bound if owned else None, today=today)
        if LOG.isEnabledFor(logging.DEBUG):
            LOG.debug("Expenses table holds %d rows", store.count())
        return store

    def close(self) -> None:
        """Release the session and, when owned, the engine."""

        self._session.close()
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> ExpenseStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def add(self, amount: str | Decimal, memo: str) -> schemas.ExpenseRecord:
        """Insert a new expense dated today.

        Raises:
            ConstraintViolation: If ``amount`` is not a valid amount of at
                least 0.01, or ``memo`` is empty.
        """

        try:
            expense_in = schemas.ExpenseCreate(amount=amount, memo=memo)
        except ValidationError as exc:
            LOG.warning("Rejected expense amount=%r memo=%r", amount, memo)
            raise ConstraintViolation(_describe(exc)) from exc

        expense = models.Expense(**expense_in.model_dump(), created_on=self._today())
        self._session.add(expense)
        try:
            self._session.flush()
            self._session.commit()
        except (IntegrityError, DataError) as exc:
            self._session.rollback()
            LOG.warning("Database rejected expense amount=%s", expense_in.amount)
            raise ConstraintViolation(
                f"Amount must be at least {models.MIN_AMOUNT}, got {expense_in.amount}"
            ) from exc
        record = schemas.ExpenseRecord.model_validate(expense)
        LOG.info("Added expense %s", record.id, extra={"expense_id": record.id, "rows_affected": 1})
        return record

    def list(self) -> list[schemas.ExpenseRecord]:
        """Return every expense ordered by date."""

        stmt = select(models.Expense).order_by(models.Expense.created_on, models.Expense.id)
        return self._records(stmt)

    def search(self, query: str) -> list[schemas.ExpenseRecord]:
        """Return expenses whose memo contains ``query``, ignoring case."""

        if not query:
            return self.list()
        stmt = (
            select(models.Expense)
            .where(models.Expense.memo.ilike(_like_pattern(query), escape="\\"))
            .order_by(models.Expense.created_on, models.Expense.id)
        )
        return self._records(stmt)

    def delete(self, expense_id: int) -> schemas.ExpenseRecord | None:
        """Delete one expense and return its prior contents.

        A missing id is not an error: ``None`` is returned and nothing is
        deleted.
        """

        expense = self._session.get(models.Expense, expense_id)
        if expense is None:
            LOG.info("No expense with id %s", expense_id, extra={"expense_id": expense_id})
            return None
        record = schemas.ExpenseRecord.model_validate(expense)
        self._session.delete(expense)
        self._session.commit()
        LOG.info("Deleted expense %s", expense_id, extra={"expense_id": expense_id, "rows_affected": 1})
        return record

    def delete_all(self) -> int:
        """Remove every expense and return how many rows were deleted."""

        result = self._session.execute(delete(models.Expense))
        self._session.commit()
        removed = max(result.rowcount or 0, 0)
        LOG.info("Deleted all expenses", extra={"rows_affected": removed})
        return removed

    def count(self) -> int:
        stmt = select(func.count()).select_from(models.Expense)
        return int(self._session.scalar(stmt) or 0)

    def _records(self, stmt) -> list[schemas.ExpenseRecord]:
        rows = self._session.scalars(stmt)
        records = [schemas.ExpenseRecord.model_validate(row) for row in rows]
        LOG.debug("Fetched %d expenses", len(records), extra={"rows_affected": len(records)})
        return records


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{field}: {error.get('msg')}")
    return "Invalid expense: " + "; ".join(parts)


__all__ = ["ExpenseStore"]
