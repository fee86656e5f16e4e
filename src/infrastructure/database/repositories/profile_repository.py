from __future__ import annotations

import threading

import psycopg2
from psycopg2 import pool

from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.postgres_client import PostgresClient, StorageError

_DB_ERRORS = (psycopg2.Error, pool.PoolError)


class ProfileRepository:
    def __init__(self, pg_client: PostgresClient | None) -> None:
        self.pg_client = pg_client
        self._mem: dict[int, ProfileEntity] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _row_to_entity(self, row: dict) -> ProfileEntity:
        """Convert database row to ProfileEntity."""
        return ProfileEntity(
            id=row["id"],
            user_id=row["user_id"],
            bio=row.get("bio") or "",
            age=row.get("age") or 0,
        )

    def create(self, user_id: int, bio: str, age: int) -> int:
        # PostgreSQL mode
        if self.pg_client:
            try:
                query = """
                    INSERT INTO profiles (user_id, bio, age)
                    VALUES (%s, %s, %s)
                    RETURNING id
                """
                row = self.pg_client.execute_insert(query, (user_id, bio, age))
                return row["id"]
            except _DB_ERRORS as exc:
                raise StorageError(f"PostgreSQL insert profile failed: {exc}") from exc

        # In-memory mode
        with self._lock:
            profile_id = self._next_id
            self._next_id += 1
            self._mem[profile_id] = ProfileEntity(id=profile_id, user_id=user_id, bio=bio, age=age)
            return profile_id

    def get(self, profile_id: int) -> ProfileEntity | None:
        if self.pg_client:
            try:
                query = """
                    SELECT id, user_id, bio, age
                    FROM profiles
                    WHERE id = %s
                """
                row = self.pg_client.execute_one(query, (profile_id,))
            except _DB_ERRORS as exc:
                raise StorageError(f"PostgreSQL select profile failed: {exc}") from exc
            return self._row_to_entity(row) if row else None

        with self._lock:
            return self._mem.get(profile_id)

    def ping(self) -> None:
        if self.pg_client:
            self.pg_client.ping()
