"""Database infrastructure for the finance tracker.

This module creates and reuses SQLAlchemy engines for the record store
database. It belongs to the infrastructure layer because it deals with
external systems.
"""

import os

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from finance_tracker.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    SQLite keeps SQLAlchemy's own pooling defaults; server databases get a
    small connection pool with health checks.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: A SQLAlchemy engine instance.
    """
    if db_url.startswith("sqlite"):
        return create_engine(db_url, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_engines: dict[str, Engine] = {}


def get_engine(db_url: str | None = None) -> Engine:
    """Get a cached SQLAlchemy engine for a database URL.

    Args:
        db_url: Database URL, defaults to ``FINANCE_DB_URL``.

    Returns:
        Engine: Lazily initialized engine, one per URL.
    """
    url = db_url or _get_env_var("FINANCE_DB_URL")
    engine = _engines.get(url)
    if engine is None:
        engine = _create_engine(url)
        _engines[url] = engine
    return engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so use cases depend only on the protocol.
    """

    def __init__(self, db_url: str | None = None) -> None:
        self._db_url = db_url

    def get_engine(self) -> Engine:
        """Get the engine for the record store database.

        Returns:
            Engine: SQLAlchemy engine connected to the record store.
        """
        return get_engine(self._db_url)


__all__ = ["get_engine", "SqlAlchemyDatabaseEngineAdapter"]
