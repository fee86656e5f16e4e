"""PostgreSQL database client.

This module provides a connection pool and helper functions for executing
parameterized statements against PostgreSQL. Each helper borrows one pooled
connection for the duration of a single statement.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Generator

import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor

from src.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised for any failure talking to the storage layer."""


class PostgresClient:
    """PostgreSQL database client with thread-safe connection pooling."""

    def __init__(self, dsn: str, minconn: int = 1, maxconn: int = 10) -> None:
        """Initialize the PostgreSQL connection pool.

        Raises:
            StorageError: If the pool cannot open its initial connections.
        """
        self.dsn = dsn
        try:
            self._pool: Any = pool.ThreadedConnectionPool(minconn=minconn, maxconn=maxconn, dsn=dsn)
        except psycopg2.Error as exc:
            raise StorageError(f"Failed to initialize PostgreSQL connection pool: {exc}") from exc
        # getconn() raises once maxconn are out; borrowers queue here instead.
        self._slots = threading.BoundedSemaphore(maxconn)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresClient":
        return cls(settings.database_url, minconn=settings.pool_min, maxconn=settings.pool_max)

    @contextmanager
    def get_connection(self) -> Generator[Any, None, None]:
        """Get a database connection from the pool.

        Yields:
            Database connection, committed on success and rolled back on error,
            always returned to the pool on exit. Blocks while every pooled
            connection is borrowed.
        """
        with self._slots:
            conn = self._pool.getconn()
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                self._pool.putconn(conn)

    @contextmanager
    def get_cursor(self, dict_cursor: bool = True) -> Generator[Any, None, None]:
        """Get a database cursor.

        Args:
            dict_cursor: If True, returns results as dictionaries (default: True).

        Yields:
            Database cursor.
        """
        with self.get_connection() as conn:
            cursor_factory = RealDictCursor if dict_cursor else None
            cursor = conn.cursor(cursor_factory=cursor_factory)
            try:
                yield cursor
            finally:
                cursor.close()

    def ping(self) -> None:
        """Verify the database is reachable.

        Raises:
            StorageError: If the round-trip fails.
        """
        try:
            with self.get_cursor(dict_cursor=False) as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except (psycopg2.Error, pool.PoolError) as exc:
            raise StorageError(f"PostgreSQL ping failed: {exc}") from exc

    def execute_one(self, query: str, params: tuple = ()) -> dict[str, Any] | None:
        """Execute a query and return a single result.

        Args:
            query: SQL query string.
            params: Query parameters.

        Returns:
            Single row as dictionary or None if no results.
        """
        with self.get_cursor() as cursor:
            cursor.execute(query, params)
            result = cursor.fetchone()
            return dict(result) if result else None

    def execute_insert(self, query: str, params: tuple = ()) -> dict[str, Any]:
        """Execute an INSERT query and return the inserted row.

        Args:
            query: SQL INSERT query with RETURNING clause.
            params: Query parameters.

        Returns:
            Inserted row as dictionary.
        """
        with self.get_cursor() as cursor:
            cursor.execute(query, params)
            result = cursor.fetchone()
            if not result:
                raise StorageError("Insert query did not return a row")
            return dict(result)

    def execute_update(self, query: str, params: tuple = ()) -> int:
        """Execute an UPDATE or DELETE query.

        Args:
            query: SQL UPDATE or DELETE query.
            params: Query parameters.

        Returns:
            Number of rows affected.
        """
        with self.get_cursor(dict_cursor=False) as cursor:
            cursor.execute(query, params)
            return cursor.rowcount

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool and not self._pool.closed:
            self._pool.closeall()
            logger.info("PostgreSQL connection pool closed")
