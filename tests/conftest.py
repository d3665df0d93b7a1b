"""Test configuration and fixtures for Photograph.

This module provides isolated test environments:
- Temporary SQLite database per test
- Identity headers standing in for the authenticating proxy
- Seeded galleries and invitations for permission tests
"""
import os
import sys
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Ensure photograph and tests are importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment BEFORE importing app modules
os.environ.setdefault("PHOTOGRAPH_LOG_LEVEL", "WARNING")

from tests.helpers import BOB, CAROL, accept, create_gallery, invite  # noqa: E402


@pytest.fixture(scope="function")
def db_path(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Initialize a fresh database file for each test."""
    import photograph.database as db_module

    path = tmp_path / "test.db"
    monkeypatch.setattr(db_module, "DATABASE_PATH", path)
    db_module.close_db()
    db_module.init_db()

    yield path

    db_module.close_db()


@pytest.fixture(scope="function")
def db_connection(db_path: Path):
    """Thread-local connection to the test database."""
    from photograph.database import get_db
    return get_db()


@pytest.fixture(scope="function")
def client(db_path: Path) -> Generator[TestClient, None, None]:
    """Create test client with fresh isolated database.

    Usage:
        def test_something(client):
            response = client.get("/api/galleries", headers=as_user(OWNER))
            assert response.status_code == 200
    """
    from photograph.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def gallery(client: TestClient) -> str:
    """Gallery owned by OWNER."""
    return create_gallery(client)


@pytest.fixture(scope="function")
def shared_gallery(client: TestClient, gallery: str) -> str:
    """Gallery with BOB as editor and CAROL as viewer, both accepted."""
    for user, role in ((BOB, "editor"), (CAROL, "viewer")):
        assert invite(client, gallery, user["email"], role).status_code == 200
        assert accept(client, gallery, user).status_code == 200
    return gallery
