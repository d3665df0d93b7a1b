import os
import sqlite3
import threading
from pathlib import Path

from .config import BASE_DIR, DB_TIMEOUT

DATABASE_PATH = Path(os.environ.get("PHOTOGRAPH_DATABASE_PATH", BASE_DIR / "gallery.db"))

# Thread-local storage for database connections
_local = threading.local()


def create_connection(path: Path = None) -> sqlite3.Connection:
    """Open a connection with row access by name and foreign keys enforced."""
    conn = sqlite3.connect(path or DATABASE_PATH, timeout=DB_TIMEOUT)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_db() -> sqlite3.Connection:
    """Get thread-local database connection"""
    if getattr(_local, "connection", None) is None or _local.path != DATABASE_PATH:
        _local.connection = create_connection(DATABASE_PATH)
        _local.path = DATABASE_PATH
    return _local.connection


def close_db():
    """Close this thread's connection, if any"""
    conn = getattr(_local, "connection", None)
    if conn is not None:
        conn.close()
    _local.connection = None
    _local.path = None


def init_db():
    """Initialize database schema"""
    db = get_db()

    # Galleries, owned by the identity that created them
    db.execute("""
        CREATE TABLE IF NOT EXISTS galleries (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT DEFAULT '',
            user_id TEXT NOT NULL,
            cover_photo_url TEXT,
            cover_color TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # Collaborators and pending invitations, one row per gallery x identity
    db.execute("""
        CREATE TABLE IF NOT EXISTS gallery_collaborators (
            gallery_id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'viewer' CHECK(role IN ('viewer', 'editor', 'admin')),
            email TEXT,
            invited_by TEXT NOT NULL,
            invited_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (gallery_id, user_id),
            FOREIGN KEY (gallery_id) REFERENCES galleries(id) ON DELETE CASCADE
        )
    """)

    db.execute("""
        CREATE TABLE IF NOT EXISTS images (
            id TEXT PRIMARY KEY,
            gallery_id TEXT NOT NULL,
            name TEXT NOT NULL,
            url TEXT NOT NULL,
            user_id TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (gallery_id) REFERENCES galleries(id) ON DELETE CASCADE
        )
    """)

    db.execute("CREATE INDEX IF NOT EXISTS idx_galleries_user_id ON galleries(user_id)")
    db.execute("CREATE INDEX IF NOT EXISTS idx_galleries_name ON galleries(name)")
    db.execute(
        "CREATE INDEX IF NOT EXISTS idx_collaborators_user_id ON gallery_collaborators(user_id)"
    )
    db.execute(
        "CREATE INDEX IF NOT EXISTS idx_collaborators_email ON gallery_collaborators(email)"
    )
    db.execute("CREATE INDEX IF NOT EXISTS idx_images_gallery_id ON images(gallery_id)")
    db.execute("CREATE INDEX IF NOT EXISTS idx_images_user_id ON images(user_id)")

    # Migration: cover_color arrived after cover_photo_url
    gallery_columns = [row[1] for row in db.execute("PRAGMA table_info(galleries)").fetchall()]
    if "cover_color" not in gallery_columns:
        db.execute("ALTER TABLE galleries ADD COLUMN cover_color TEXT")

    db.commit()
