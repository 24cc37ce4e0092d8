"""Database infrastructure for the finance tracker.

This module exposes helpers to create and reuse the SQLAlchemy engine
backing the sqlalchemy user repository. It belongs to the infrastructure
layer because it deals with an external system (SQLite by default).
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.utils.utils import get_project_root


def _get_db_url() -> str:
    """Return ``FINANCE_DB_URL`` after loading ``.env``.

    Returns:
        str: Configured URL, or a SQLite file under ``data/``.
    """
    dotenv.load_dotenv()
    value = os.getenv("FINANCE_DB_URL")
    if value:
        return value
    return f"sqlite:///{get_project_root() / 'data' / 'finance.db'}"


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: A SQLAlchemy engine with health checks enabled.
    """
    return create_engine(
        db_url,
        pool_pre_ping=True,
        future=True,
    )


_finance_engine: Optional[Engine] = None


def get_finance_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the finance database.

    Returns:
        Engine: Lazily initialized engine.
    """
    global _finance_engine
    if _finance_engine is None:
        _finance_engine = _create_engine(_get_db_url())
    return _finance_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    With an explicit URL the adapter owns a private engine; otherwise it
    proxies the module-level singleton configured from the environment.
    """

    def __init__(self, db_url: str | None = None) -> None:
        self._db_url = db_url
        self._engine: Optional[Engine] = None

    def get_engine(self) -> Engine:
        """Get the engine for the finance database.

        Returns:
            Engine: SQLAlchemy engine, created on first use.
        """
        if self._db_url is None:
            return get_finance_engine()
        if self._engine is None:
            self._engine = _create_engine(self._db_url)
        return self._engine


__all__ = ["get_finance_engine", "SqlAlchemyDatabaseEngineAdapter"]
