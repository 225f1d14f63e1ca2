"""Database connection helpers and initialization."""

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from inventory.core.config import settings

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def resolve_db_path(database_url: Optional[str] = None) -> str:
    """Extract the file path from a DATABASE_URL (strip "sqlite:///")."""
    url = database_url or settings.DATABASE_URL
    return url.replace("sqlite:///", "", 1)


def _ensure_db_dir(db_path: str) -> None:
    if db_path == MEMORY_DB:
        return
    db_dir = os.path.dirname(db_path) or "."
    os.makedirs(db_dir, exist_ok=True)
    logger.trace("Database directory ensured at %s", db_dir)


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection with row factory."""
    db_path = db_path or resolve_db_path()
    _ensure_db_dir(db_path)
    logger.trace("Opening database connection to %s", db_path)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_db(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run a block as one transaction on ``conn``, committing or rolling back."""
    try:
        yield conn
        conn.commit()
        logger.trace("Database transaction committed")
    except Exception:
        logger.error("Database transaction rolled back", exc_info=True)
        conn.rollback()
        raise


def init_db(conn: sqlite3.Connection) -> None:
    """Initialize the database by creating all tables."""
    logger.info("Initializing database schema")
    from inventory.db import schema

    schema.create_tables(conn)
