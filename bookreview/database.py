"""
Database Configuration Module

SQLAlchemy 2.0 setup for the review service: engine, session factory,
declarative base, the per-request session dependency, and the guard that
turns unexpected driver errors into StorageError.

Session Management Pattern
==========================
"Session per request":
1. Request arrives → create a new session
2. Every storage call of that request uses the session
3. Services commit on success, roll back on failure
4. The session is closed when the request ends
"""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookreview.config import get_settings
from bookreview.errors import StorageError

logger = logging.getLogger(__name__)

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# pool_pre_ping tests connection health before use. SQLite has no
# server-side pool, so pool sizing only applies to other backends.


def configure_sqlite(sqlite_engine: Engine) -> Engine:
    """
    Make SQLite honour foreign keys and lock on transaction start.

    pysqlite opens transactions lazily and never for a SELECT, so a
    read-then-write sequence such as the review delete-guard would run
    without any lock. Here the driver's own BEGIN handling is switched off
    and every transaction starts with BEGIN IMMEDIATE, taking the database
    write lock before the first read. Concurrent writers wait (up to the
    driver timeout) instead of interleaving.

    Args:
        sqlite_engine: Engine created for a sqlite:// URL

    Returns:
        The same engine, with its event hooks registered
    """

    @event.listens_for(sqlite_engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sqlite_engine, "begin")
    def _on_begin(connection) -> None:
        connection.exec_driver_sql("BEGIN IMMEDIATE")

    return sqlite_engine


if settings.is_sqlite:
    engine = configure_sqlite(
        create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )
    )
else:
    engine = create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

        class Review(Base):
            __tablename__ = "reviews"
            ...
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route handler uses it, and
    the finally block closes it even if the handler raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def storage_guard(db: Session, operation: str) -> Iterator[None]:
    """
    Roll back and re-raise driver errors as StorageError.

    Usage:
        with storage_guard(db, "delete_review"):
            ...

    Args:
        db: Session used inside the block
        operation: Name recorded in the log and on the raised error

    Raises:
        StorageError: If any SQLAlchemyError escapes the block
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Storage failure during {operation}: {exc}")
        raise StorageError(operation) from exc


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Called at startup for SQLite development databases; PostgreSQL schemas
    are managed outside this service.
    """
    Base.metadata.create_all(bind=engine)
