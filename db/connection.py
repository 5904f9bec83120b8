"""
db/connection.py
----------------
Manages the PostgreSQL connection pool backing the state store.
Uses psycopg2's SimpleConnectionPool for connection reuse.
"""

from contextlib import contextmanager

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = 1, max_conn: int = 3, dsn: str = DATABASE_URL) -> None:
    """
    Initialize the database connection pool (no-op if already open).

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, dsn)
        logger.info("Database connection pool initialized.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Borrow a connection from the pool.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """Return a borrowed connection to the pool."""
    if _pool is not None:
        _pool.putconn(conn)


@contextmanager
def transaction():
    """
    Borrow a connection for one unit of work.

    Commits on success; rolls back and re-raises on any error. The
    connection always goes back to the pool.
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        release_connection(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
