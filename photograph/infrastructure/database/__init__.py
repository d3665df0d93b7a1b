"""Async database infrastructure.

This module provides async database connectivity using aiosqlite.
"""
from .connection import (
    get_async_db, release_async_db, close_async_db, async_connection, AsyncConnectionPool
)

__all__ = [
    'get_async_db',
    'release_async_db',
    'close_async_db',
    'async_connection',
    'AsyncConnectionPool',
]
