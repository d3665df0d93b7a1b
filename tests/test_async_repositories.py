"""Tests for async repositories and the async connection pool.

Tests async database operations using aiosqlite.
"""
import pytest
import pytest_asyncio
import aiosqlite

from photograph.application.models import Role
from photograph.infrastructure.database import (
    AsyncConnectionPool, async_connection, close_async_db
)
from photograph.infrastructure.repositories import (
    AsyncCollaboratorRepository, CollaboratorRepository, GalleryRepository
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def seeded(db_connection):
    """Two galleries inviting bob@x.com, one of them already accepted by Carol."""
    galleries = GalleryRepository(db_connection)
    collaborators = CollaboratorRepository(db_connection)

    holidays = galleries.create("Holidays", "u_owner")
    birthdays = galleries.create("Birthdays", "u_carol")
    collaborators.upsert_pending(holidays, "bob@x.com", Role.EDITOR, invited_by="u_owner")
    collaborators.upsert_pending(birthdays, "bob@x.com", Role.VIEWER, invited_by="u_carol")
    collaborators.upsert_pending(holidays, "carol@x.com", Role.VIEWER, invited_by="u_owner")
    collaborators.resolve_pending(holidays, "carol@x.com", "u_carol")
    return {"holidays": holidays, "birthdays": birthdays}


@pytest_asyncio.fixture
async def async_db(db_path):
    """aiosqlite connection to the initialized test database."""
    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    yield conn
    await conn.close()


# =============================================================================
# AsyncCollaboratorRepository
# =============================================================================

class TestAsyncCollaboratorRepository:

    @pytest.mark.asyncio
    async def test_list_pending_for_email(self, async_db, seeded):
        repo = AsyncCollaboratorRepository(async_db)

        invitations = await repo.list_pending_for_email("bob@x.com")

        by_gallery = {i["gallery_id"]: i for i in invitations}
        assert set(by_gallery) == {seeded["holidays"], seeded["birthdays"]}
        assert by_gallery[seeded["holidays"]]["gallery_name"] == "Holidays"
        assert by_gallery[seeded["holidays"]]["role"] == "editor"
        assert by_gallery[seeded["birthdays"]]["invited_by"] == "u_carol"
        assert "user_id" not in by_gallery[seeded["holidays"]]

    @pytest.mark.asyncio
    async def test_accepted_invitations_are_not_listed(self, async_db, seeded):
        repo = AsyncCollaboratorRepository(async_db)

        assert await repo.list_pending_for_email("carol@x.com") == []

    @pytest.mark.asyncio
    async def test_unknown_email(self, async_db, seeded):
        repo = AsyncCollaboratorRepository(async_db)

        assert await repo.list_pending_for_email("nobody@x.com") == []


# =============================================================================
# Connection pool
# =============================================================================

class TestAsyncConnectionPool:

    @pytest.mark.asyncio
    async def test_released_connection_is_reused(self, db_path):
        pool = AsyncConnectionPool(db_path, max_idle=1)

        conn = await pool.acquire()
        await pool.release(conn)
        again = await pool.acquire()

        assert again is conn
        await pool.release(again)
        await pool.close_all()

    @pytest.mark.asyncio
    async def test_foreign_keys_enabled(self, db_path):
        pool = AsyncConnectionPool(db_path)

        conn = await pool.acquire()
        cursor = await conn.execute("PRAGMA foreign_keys")
        row = await cursor.fetchone()

        assert row[0] == 1
        await pool.release(conn)
        await pool.close_all()

    @pytest.mark.asyncio
    async def test_module_pool_follows_database_path(self, db_path, seeded):
        try:
            async with async_connection() as conn:
                repo = AsyncCollaboratorRepository(conn)
                invitations = await repo.list_pending_for_email("bob@x.com")
        finally:
            await close_async_db()

        assert len(invitations) == 2
