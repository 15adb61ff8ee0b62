"""Database configuration for the expense tracker."""

from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine, inspect
from sqlalchemy.orm import declarative_base, sessionmaker

from expenses import config

LOG = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(url: str | None = None, **kwargs: object) -> Engine:
    """Create the engine for ``url`` or the configured database URL."""

    resolved = url or config.database_url()
    LOG.debug("Creating engine for %s", resolved)
    return create_engine(resolved, future=True, **kwargs)


def make_sessionmaker(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False, future=True)


def table_exists(engine: Engine, table_name: str) -> bool:
    """Check the catalog of the default schema for ``table_name``."""

    return inspect(engine).has_table(table_name)


def init_db(engine: Engine) -> bool:
    """Create the expenses table if it does not already exist.

    Returns ``True`` when the table had to be created.
    """

    from . import models  # Import models for metadata registration

    if table_exists(engine, models.Expense.__tablename__):
        return False
    LOG.info("Creating table %s", models.Expense.__tablename__)
    Base.metadata.create_all(bind=engine, tables=[models.Expense.__table__])
    return True


__all__ = ["Base", "init_db", "make_engine", "make_sessionmaker", "table_exists"]
