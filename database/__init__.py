"""
Records database: engine, session scopes and startup helpers.

ORM models live in program_risk.models.
"""

from .engine import (
    Base,
    DEFAULT_DATABASE_URL,
    DatabaseSettings,
    get_database_url,
    create_database_engine,
    get_engine,
    get_session_factory,
    reset_engine,
    get_db_session,
    transaction_scope,
    verify_database_connection,
    create_all_tables,
    initialize_database,
    DatabasePersistenceError,
    DatabaseConnectionError,
    DatabaseInitializationError,
)


__all__ = [
    "Base",
    "DEFAULT_DATABASE_URL",
    "DatabaseSettings",
    "get_database_url",
    "create_database_engine",
    "get_engine",
    "get_session_factory",
    "reset_engine",
    "get_db_session",
    "transaction_scope",
    "verify_database_connection",
    "create_all_tables",
    "initialize_database",
    "DatabasePersistenceError",
    "DatabaseConnectionError",
    "DatabaseInitializationError",
]
