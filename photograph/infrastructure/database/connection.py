"""aiosqlite connections for the endpoints clients poll.

Connections are kept in a small pool bound to the current
``photograph.database.DATABASE_PATH``; pointing the application at another
file (as the tests do) retires the old pool.
"""
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite

from ... import database as db_module
from ...config import DB_TIMEOUT

_pool: Optional['AsyncConnectionPool'] = None


class AsyncConnectionPool:
    """Idle aiosqlite connections to one database file, at most ``max_idle``."""

    def __init__(self, db_path: Path, max_idle: int = 10):
        self.db_path = db_path
        self.max_idle = max_idle
        self._idle: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    async def acquire(self) -> aiosqlite.Connection:
        async with self._lock:
            if self._idle:
                return self._idle.pop()

        conn = await aiosqlite.connect(self.db_path, timeout=DB_TIMEOUT)
        conn.row_factory = aiosqlite.Row
        await conn.execute("PRAGMA foreign_keys = ON")
        return conn

    async def release(self, conn: aiosqlite.Connection) -> None:
        async with self._lock:
            if len(self._idle) < self.max_idle:
                self._idle.append(conn)
                return
        await conn.close()

    async def close_all(self) -> None:
        async with self._lock:
            idle, self._idle = self._idle, []
        for conn in idle:
            await conn.close()


async def get_async_db() -> aiosqlite.Connection:
    """Connection to the current database, from the pool if one is idle."""
    global _pool
    if _pool is not None and _pool.db_path != db_module.DATABASE_PATH:
        await _pool.close_all()
        _pool = None
    if _pool is None:
        _pool = AsyncConnectionPool(db_module.DATABASE_PATH)
    return await _pool.acquire()


async def release_async_db(conn: aiosqlite.Connection) -> None:
    """Hand a connection back; it is closed if its pool was retired."""
    if _pool is not None and _pool.db_path == db_module.DATABASE_PATH:
        await _pool.release(conn)
    else:
        await conn.close()


@asynccontextmanager
async def async_connection() -> AsyncIterator[aiosqlite.Connection]:
    """``async with async_connection() as conn:`` around get/release."""
    conn = await get_async_db()
    try:
        yield conn
    finally:
        await release_async_db(conn)


async def close_async_db() -> None:
    """Close the pooled connections (application shutdown)."""
    global _pool
    if _pool:
        await _pool.close_all()
        _pool = None
