"""Repository base classes over sqlite3 and aiosqlite connections."""
from contextlib import contextmanager
from typing import Iterator, Protocol
import sqlite3

import aiosqlite


class ConnectionProtocol(Protocol):
    """What repositories need from a connection."""

    def execute(self, sql: str, parameters: tuple = ...) -> sqlite3.Cursor: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class Repository:
    """Base class of the synchronous repositories.

    Writes commit immediately unless they run inside ``transaction()``.

    Example:
        class ImageRepository(Repository):
            def get_by_id(self, image_id: str) -> dict | None:
                cursor = self._execute("SELECT * FROM images WHERE id = ?", (image_id,))
                return self._row_to_dict(cursor.fetchone())
    """

    def __init__(self, connection: ConnectionProtocol):
        self._conn = connection

    def _execute(self, sql: str, parameters: tuple = ()) -> sqlite3.Cursor:
        """Run one parameterized statement."""
        return self._conn.execute(sql, parameters)

    def _commit(self) -> None:
        self._conn.commit()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit the statements of the block together, or none of them."""
        try:
            yield
        except Exception:
            self._conn.rollback()
            raise
        self._conn.commit()

    def _row_to_dict(self, row: sqlite3.Row | None) -> dict | None:
        return dict(row) if row else None

    def _fetchall(self, sql: str, parameters: tuple = ()) -> list[dict]:
        """Rows of a query as plain dicts."""
        cursor = self._execute(sql, parameters)
        return [dict(row) for row in cursor.fetchall()]


class AsyncRepository:
    """Base class of the read-only aiosqlite repositories."""

    def __init__(self, connection: aiosqlite.Connection):
        self._conn = connection

    async def _fetchall(self, sql: str, parameters: tuple = ()) -> list[dict]:
        """Rows of a query as plain dicts; the cursor is closed afterwards.

        Args:
            sql: SQL query
            parameters: Query parameters

        Returns:
            List of dictionaries
        """
        async with self._conn.execute(sql, parameters) as cursor:
            rows = await cursor.fetchall()
        return [dict(row) for row in rows]
