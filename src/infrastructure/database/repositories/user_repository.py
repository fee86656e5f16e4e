from __future__ import annotations

import threading
from datetime import UTC, datetime

import psycopg2
from psycopg2 import pool

from src.domain.entities.user import UserEntity
from src.infrastructure.database.postgres_client import PostgresClient, StorageError

_DB_ERRORS = (psycopg2.Error, pool.PoolError)


class UserRepository:
    """Single-row access to the ``users`` table.

    Without a ``pg_client`` rows live in an in-memory dict owned by this
    instance, which is how tests and ``STORAGE_BACKEND=memory`` runs work.
    """

    def __init__(self, pg_client: PostgresClient | None) -> None:
        self.pg_client = pg_client
        self._mem: dict[int, UserEntity] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _row_to_entity(self, row: dict) -> UserEntity:
        """Convert database row to UserEntity."""
        created_at = row["created_at"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)

        return UserEntity(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            created_at=created_at,
        )

    def create(self, email: str, name: str) -> int:
        # PostgreSQL mode
        if self.pg_client:
            try:
                query = """
                    INSERT INTO users (email, name)
                    VALUES (%s, %s)
                    RETURNING id
                """
                row = self.pg_client.execute_insert(query, (email, name))
                return row["id"]
            except _DB_ERRORS as exc:
                raise StorageError(f"PostgreSQL insert user failed: {exc}") from exc

        # In-memory mode
        with self._lock:
            user_id = self._next_id
            self._next_id += 1
            self._mem[user_id] = UserEntity(
                id=user_id, email=email, name=name, created_at=datetime.now(UTC)
            )
            return user_id

    def get(self, user_id: int) -> UserEntity | None:
        if self.pg_client:
            try:
                query = """
                    SELECT id, email, name, created_at
                    FROM users
                    WHERE id = %s
                """
                row = self.pg_client.execute_one(query, (user_id,))
            except _DB_ERRORS as exc:
                raise StorageError(f"PostgreSQL select user failed: {exc}") from exc
            return self._row_to_entity(row) if row else None

        with self._lock:
            return self._mem.get(user_id)

    def update_name(self, user_id: int, name: str) -> bool:
        """Set the user's name. Returns False when no row matched."""
        if self.pg_client:
            try:
                query = "UPDATE users SET name = %s WHERE id = %s"
                return self.pg_client.execute_update(query, (name, user_id)) > 0
            except _DB_ERRORS as exc:
                raise StorageError(f"PostgreSQL update user failed: {exc}") from exc

        with self._lock:
            current = self._mem.get(user_id)
            if current is None:
                return False
            self._mem[user_id] = UserEntity(
                id=current.id, email=current.email, name=name, created_at=current.created_at
            )
            return True

    def delete(self, user_id: int) -> bool:
        """Delete the user. Profiles pointing at it are left untouched."""
        if self.pg_client:
            try:
                query = "DELETE FROM users WHERE id = %s"
                return self.pg_client.execute_update(query, (user_id,)) > 0
            except _DB_ERRORS as exc:
                raise StorageError(f"PostgreSQL delete user failed: {exc}") from exc

        with self._lock:
            return self._mem.pop(user_id, None) is not None

    def ping(self) -> None:
        if self.pg_client:
            self.pg_client.ping()
