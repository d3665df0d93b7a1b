"""Gallery repository - handles all gallery-related database operations.

A gallery is owned by the identity that created it (``user_id``) and
exclusively owns its images and collaborator rows.
"""
import uuid

from .base import Repository


class GalleryRepository(Repository):
    """Repository for gallery entity operations.

    Examples:
        >>> repo = GalleryRepository(db)
        >>> gallery_id = repo.create("Holidays", "user_abc")
        >>> repo.update(gallery_id, cover_color="#112233")
        >>> repo.delete(gallery_id)  # also removes images and collaborators
    """

    UPDATABLE_FIELDS = ("name", "description", "cover_photo_url", "cover_color")

    def create(self, name: str, user_id: str, description: str = "") -> str:
        """Create a new gallery.

        Args:
            name: Gallery name
            user_id: Owner identity
            description: Free text description

        Returns:
            New gallery UUID
        """
        gallery_id = str(uuid.uuid4())
        self._execute(
            """INSERT INTO galleries (id, name, description, user_id)
               VALUES (?, ?, ?, ?)""",
            (gallery_id, name.strip(), description or "", user_id)
        )
        self._commit()
        return gallery_id

    def get_by_id(self, gallery_id: str) -> dict | None:
        """Get gallery by ID.

        Returns:
            Gallery dict or None
        """
        cursor = self._execute(
            "SELECT * FROM galleries WHERE id = ?",
            (gallery_id,)
        )
        return self._row_to_dict(cursor.fetchone())

    def update(self, gallery_id: str, **fields) -> bool:
        """Update gallery metadata and cover.

        Only keys listed in UPDATABLE_FIELDS are written; ``None`` is stored
        as NULL, so callers pass exactly the columns they mean to change.

        Returns:
            True if gallery existed and was updated
        """
        columns = [name for name in self.UPDATABLE_FIELDS if name in fields]
        if not columns:
            return False

        assignments = ", ".join(f"{name} = ?" for name in columns)
        values = tuple(fields[name] for name in columns)
        cursor = self._execute(
            f"UPDATE galleries SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            values + (gallery_id,)
        )
        self._commit()
        return cursor.rowcount > 0

    def delete(self, gallery_id: str) -> bool:
        """Delete gallery together with its images and collaborator rows.

        Everything is removed in one transaction.

        Returns:
            True if the gallery existed
        """
        with self.transaction():
            self._execute("DELETE FROM images WHERE gallery_id = ?", (gallery_id,))
            self._execute("DELETE FROM gallery_collaborators WHERE gallery_id = ?", (gallery_id,))
            cursor = self._execute("DELETE FROM galleries WHERE id = ?", (gallery_id,))
        return cursor.rowcount > 0

    def list_accessible(self, user_id: str) -> list[dict]:
        """Get galleries the user owns or collaborates on.

        Each row carries ``role``: 'owner' or the collaborator role.
        Pending invitations do not grant access and are not listed.
        """
        return self._fetchall(
            """SELECT g.*, 'owner' AS role
               FROM galleries g
               WHERE g.user_id = ?
               UNION ALL
               SELECT g.*, gc.role AS role
               FROM galleries g
               JOIN gallery_collaborators gc ON gc.gallery_id = g.id
               WHERE gc.user_id = ? AND g.user_id != ?
               ORDER BY created_at DESC, name""",
            (user_id, user_id, user_id)
        )

