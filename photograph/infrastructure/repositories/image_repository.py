"""Image repository - image records of a gallery.

Images are stored by URL; the bytes live with the upload pipeline.
"""
import uuid

from .base import Repository


class ImageRepository(Repository):
    """Repository for image entity operations."""

    def create(self, gallery_id: str, url: str, name: str, user_id: str) -> str:
        """Record an uploaded image.

        Args:
            gallery_id: Owning gallery
            url: Public URL produced by the upload pipeline
            name: Original filename
            user_id: Uploader identity

        Returns:
            New image UUID
        """
        image_id = str(uuid.uuid4())
        self._execute(
            """INSERT INTO images (id, gallery_id, name, url, user_id)
               VALUES (?, ?, ?, ?, ?)""",
            (image_id, gallery_id, name, url, user_id)
        )
        self._commit()
        return image_id

    def get_by_id(self, image_id: str) -> dict | None:
        cursor = self._execute("SELECT * FROM images WHERE id = ?", (image_id,))
        return self._row_to_dict(cursor.fetchone())

    def list_for_gallery(self, gallery_id: str) -> list[dict]:
        """Images of a gallery, newest first."""
        return self._fetchall(
            "SELECT * FROM images WHERE gallery_id = ? ORDER BY created_at DESC, rowid DESC",
            (gallery_id,)
        )

    def delete(self, image_id: str) -> bool:
        cursor = self._execute("DELETE FROM images WHERE id = ?", (image_id,))
        self._commit()
        return cursor.rowcount > 0
