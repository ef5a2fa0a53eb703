"""
Database persistence layer for saved-recipe storage.

This module provides an optional SQL-backed key-value table that can be enabled
by setting the DATABASE_URL environment variable. If DATABASE_URL is not set, the
module reports itself as disabled and culinaria.storage falls back to the
in-memory store.

When DATABASE_URL is set:
- favorites_<userId>, collections_<userId> and demoUser are stored as rows of
  the kv_entries table (key -> JSON text)

When DATABASE_URL is not set:
- db_is_enabled() returns False
- All DB operations are skipped
"""

import logging
import os
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import func

logger = logging.getLogger(__name__)

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL")

Base = declarative_base()

# Database engine and session factory (only set when a URL is configured)
engine = None
SessionLocal = None


class KeyValueRow(Base):
    """Key-value table - one row per storage key."""
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)


def configure_database(url: Optional[str]) -> None:
    """
    (Re)bind the module to a database URL.

    Passing None disables persistence. In-memory SQLite URLs share one
    connection so every session sees the same data (used by tests).

    Args:
        url: SQLAlchemy database URL (e.g., "postgresql://...", "sqlite://") or None
    """
    global engine, SessionLocal

    if engine is not None:
        engine.dispose()
    engine = None
    SessionLocal = None

    if not url:
        return

    kwargs = {"pool_pre_ping": True, "echo": False}
    if url.startswith("sqlite") and (url == "sqlite://" or ":memory:" in url):
        kwargs["connect_args"] = {"check_same_thread": False}
        kwargs["poolclass"] = StaticPool

    try:
        engine = create_engine(url, **kwargs)
        SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info("Database connection initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database connection: {e}")
        engine = None
        SessionLocal = None


configure_database(DATABASE_URL)


def db_is_enabled() -> bool:
    """
    Check if database persistence is enabled.

    Returns:
        True if a database URL is configured and the engine was created
    """
    return engine is not None and SessionLocal is not None


def init_db() -> None:
    """
    Initialize database tables (create if they don't exist).

    Safe to call multiple times.

    Raises:
        Exception: If database connection fails or table creation fails
    """
    if not db_is_enabled():
        logger.debug("Database not enabled, skipping init_db()")
        return

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized (or already exist)")
    except Exception as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise


def get_db_session():
    """
    Get a database session.

    Raises:
        RuntimeError: If database is not enabled
    """
    if not db_is_enabled():
        raise RuntimeError("Database is not enabled. Set DATABASE_URL environment variable.")

    return SessionLocal()


# ============================================================================
# Key-Value Repository Functions
# ============================================================================

def db_get_value(key: str) -> Optional[str]:
    """
    Read the raw value stored under a key.

    Args:
        key: Storage key (e.g., "favorites_user-1")

    Returns:
        Stored text, or None if the key is absent or the DB is disabled

    Raises:
        Exception: If the query fails (callers decide how to degrade)
    """
    if not db_is_enabled():
        return None

    db = get_db_session()
    try:
        row = db.get(KeyValueRow, key)
        return row.value if row else None
    finally:
        db.close()


def db_set_value(key: str, value: str) -> None:
    """
    Insert or replace the value stored under a key.

    Args:
        key: Storage key
        value: Text to store (JSON for all keys used by the app)
    """
    if not db_is_enabled():
        return

    db = get_db_session()
    try:
        row = db.get(KeyValueRow, key)
        if row is None:
            db.add(KeyValueRow(key=key, value=value))
        else:
            row.value = value
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error writing key {key!r} to database: {e}")
        raise
    finally:
        db.close()


def db_delete_value(key: str) -> None:
    """Delete a key; missing keys are a no-op."""
    if not db_is_enabled():
        return

    db = get_db_session()
    try:
        db.query(KeyValueRow).filter(KeyValueRow.key == key).delete()
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting key {key!r} from database: {e}")
        raise
    finally:
        db.close()


def get_kv_entries_count() -> int:
    """
    Get the total number of stored keys.

    Returns:
        Number of rows (0 if DB is not enabled or on error)
    """
    if not db_is_enabled():
        return 0

    db = get_db_session()
    try:
        return db.query(KeyValueRow).count()
    except Exception as e:
        logger.debug(f"Error counting kv entries: {e}")
        return 0
    finally:
        db.close()
