"""
Database Layer - Program Records Engine.

============================================================
PURPOSE
============================================================
One process-wide SQLAlchemy engine for the program records
read by the SQL summary providers, plus the session scopes
used to load and read those records.

============================================================
SETTINGS (environment, .env honoured)
============================================================
- DATABASE_URL            records database (SQLite file by default)
- DATABASE_POOL_SIZE      pooled connections (server databases only)
- DATABASE_ECHO           "true" to log emitted SQL

============================================================
"""

import os
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

load_dotenv()

logger = logging.getLogger(__name__)

Base = declarative_base()

DEFAULT_DATABASE_URL = "sqlite:///./program_records.db"

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


# =============================================================
# SETTINGS
# =============================================================


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection settings for the records database."""

    url: str = DEFAULT_DATABASE_URL
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle_seconds: int = 1800
    echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def display_url(self) -> str:
        """URL without credentials."""
        return self.url.rsplit("@", 1)[-1]

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        return cls(
            url=get_database_url(),
            pool_size=int(os.getenv("DATABASE_POOL_SIZE", cls.pool_size)),
            echo=os.getenv("DATABASE_ECHO", "false").strip().lower() in ("1", "true", "yes"),
        )


def get_database_url() -> str:
    """DATABASE_URL, or the local SQLite file when unset."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    logger.warning(f"DATABASE_URL is not set, falling back to {DEFAULT_DATABASE_URL}")
    return DEFAULT_DATABASE_URL


# =============================================================
# ENGINE
# =============================================================


def create_database_engine(
    url: Optional[str] = None,
    settings: Optional[DatabaseSettings] = None,
) -> Engine:
    """
    Build the records engine and make it the process-wide one.

    Args:
        url: Overrides the configured database URL
        settings: Connection settings (environment if not provided)

    Returns:
        The new engine
    """
    global _engine, _session_factory

    settings = settings or DatabaseSettings.from_env()
    if url:
        settings = DatabaseSettings(
            url=url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_recycle_seconds=settings.pool_recycle_seconds,
            echo=settings.echo,
        )

    logger.info(f"Opening records database: {settings.display_url}")

    if settings.is_sqlite:
        # Providers query from worker threads
        engine = create_engine(
            settings.url,
            echo=settings.echo,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(
            settings.url,
            echo=settings.echo,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_recycle=settings.pool_recycle_seconds,
            pool_pre_ping=True,
        )

    if _engine is not None:
        _engine.dispose()
    _engine = engine
    _session_factory = None
    return engine


def get_engine() -> Engine:
    if _engine is None:
        return create_database_engine()
    return _engine


def get_session_factory() -> sessionmaker:
    """Session factory bound to the records engine; pass it to SqlSummaryProviders."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


def reset_engine() -> None:
    """Dispose of the engine; the next call builds a fresh one."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


# =============================================================
# SESSION SCOPES
# =============================================================


@contextmanager
def get_db_session() -> Iterator[Session]:
    """
    Read scope: yields a session, rolls back and re-raises on error,
    always closes. Nothing is committed.

        with get_db_session() as session:
            summary = ProgramRecordsRepository(session).get_budget_summary("PRG-001")
    """
    session = get_session_factory()()
    try:
        yield session
    except Exception as e:
        logger.error(f"Records session failed, rolling back: {e}")
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def transaction_scope() -> Iterator[Session]:
    """
    Write scope: commits when the block completes.

    Raises:
        DatabasePersistenceError: The block or the commit failed
            (the transaction is rolled back)
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Records transaction rolled back: {e}")
        raise DatabasePersistenceError(f"Records transaction failed: {e}") from e
    finally:
        session.close()


# =============================================================
# STARTUP
# =============================================================


def verify_database_connection() -> None:
    """
    Raises:
        DatabaseConnectionError: The records database is unreachable
    """
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Records database unreachable: {e}")
        raise DatabaseConnectionError(f"Cannot reach records database: {e}") from e


def create_all_tables() -> None:
    """
    Create any missing program records tables.

    Raises:
        DatabaseInitializationError: Table creation failed
    """
    from program_risk import models  # noqa: F401  (registers the tables)

    try:
        Base.metadata.create_all(bind=get_engine())
    except SQLAlchemyError as e:
        logger.error(f"Could not create records tables: {e}")
        raise DatabaseInitializationError(f"Records table creation failed: {e}") from e
    logger.info(f"Records tables ready: {', '.join(sorted(Base.metadata.tables))}")


def initialize_database() -> None:
    """Check connectivity, then create missing tables. Call once at startup."""
    verify_database_connection()
    create_all_tables()


# =============================================================
# EXCEPTIONS
# =============================================================


class DatabasePersistenceError(Exception):
    """A records database operation failed."""


class DatabaseConnectionError(DatabasePersistenceError):
    """The records database could not be reached."""


class DatabaseInitializationError(DatabasePersistenceError):
    """The records schema could not be created."""
