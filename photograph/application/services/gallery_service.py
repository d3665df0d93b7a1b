"""Gallery service - galleries and their images.

Entry points for every gallery and image operation. Each one checks the
caller against the access service before touching the store.
"""
import re
from typing import Optional, List

from ...config import (
    logger, GALLERY_NAME_MAX_LENGTH, GALLERY_DESCRIPTION_MAX_LENGTH, IMAGE_NAME_MAX_LENGTH
)
from ...infrastructure.repositories import GalleryRepository, ImageRepository
from ..errors import InvalidInput, NotFound
from .access_service import AccessService, require_identity, VIEW, EDIT, OWNER

COVER_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class GalleryService:
    """Service for gallery and image operations.

    Responsibilities:
    - Gallery CRUD with owner/editor checks
    - Cover photo or cover colour (never both)
    - Image records of a gallery
    """

    def __init__(
        self,
        gallery_repository: GalleryRepository,
        image_repository: ImageRepository,
        access_service: AccessService
    ):
        self.gallery_repo = gallery_repository
        self.image_repo = image_repository
        self.access = access_service

    # =========================================================================
    # Galleries
    # =========================================================================

    def create_gallery(self, user_id: Optional[str], name: str, description: str = "") -> dict:
        """Create a gallery owned by the caller.

        Args:
            user_id: Caller identity, becomes the owner
            name: Gallery name (required)
            description: Optional description

        Returns:
            Created gallery dict

        Raises:
            Unauthenticated: No caller identity
            InvalidInput: Missing or too long name/description
        """
        require_identity(user_id)
        name = self._validate_name(name)
        description = self._validate_description(description)

        gallery_id = self.gallery_repo.create(name, user_id, description)
        logger.info(f"Gallery {gallery_id} created by {user_id}")
        return self.gallery_repo.get_by_id(gallery_id)

    def get_gallery(self, gallery_id: str, user_id: Optional[str]) -> dict:
        """Gallery with the caller's role attached."""
        gallery, access = self.access.authorize(gallery_id, user_id, VIEW)
        return {**gallery, "role": access.label}

    def list_galleries(self, user_id: Optional[str]) -> List[dict]:
        """Galleries the caller owns or collaborates on."""
        require_identity(user_id)
        return self.gallery_repo.list_accessible(user_id)

    def get_role(self, gallery_id: str, user_id: Optional[str]) -> str:
        """'owner' or the caller's collaborator role."""
        _, access = self.access.authorize(gallery_id, user_id, VIEW, message="Not a collaborator")
        return access.label

    def update_gallery(self, gallery_id: str, user_id: Optional[str], changes: dict) -> dict:
        """Update name, description or cover of a gallery.

        ``changes`` holds only the fields the caller sent. Setting a cover
        photo clears the cover colour and the other way round.

        Raises:
            Forbidden: Caller lacks edit access
            InvalidInput: Invalid values or nothing to update
        """
        self.access.authorize(gallery_id, user_id, EDIT)

        fields = {}
        if "name" in changes:
            fields["name"] = self._validate_name(changes["name"])
        if "description" in changes:
            fields["description"] = self._validate_description(changes["description"])

        cover_photo_url = changes.get("cover_photo_url")
        cover_color = changes.get("cover_color")
        if cover_photo_url and cover_color:
            raise InvalidInput("Choose either a cover photo or a cover color, not both")
        if cover_color and not COVER_COLOR_PATTERN.match(cover_color):
            raise InvalidInput("Cover color must look like #rrggbb")

        if "cover_photo_url" in changes:
            fields["cover_photo_url"] = cover_photo_url or None
            if cover_photo_url:
                fields["cover_color"] = None
        if "cover_color" in changes:
            fields["cover_color"] = cover_color or None
            if cover_color:
                fields["cover_photo_url"] = None

        if not fields:
            raise InvalidInput("Nothing to update")

        self.gallery_repo.update(gallery_id, **fields)
        return self.gallery_repo.get_by_id(gallery_id)

    def delete_gallery(self, gallery_id: str, user_id: Optional[str]) -> None:
        """Delete a gallery with its images and collaborators (owner only)."""
        self.access.authorize(
            gallery_id, user_id, OWNER,
            message="Only the gallery owner can delete it"
        )
        self.gallery_repo.delete(gallery_id)
        logger.info(f"Gallery {gallery_id} deleted by {user_id}")

    # =========================================================================
    # Images
    # =========================================================================

    def add_image(self, gallery_id: str, user_id: Optional[str], url: str, name: str) -> dict:
        """Record an image produced by the upload pipeline."""
        self.access.authorize(gallery_id, user_id, EDIT)

        url = (url or "").strip()
        name = (name or "").strip()
        if not url:
            raise InvalidInput("Image URL is required")
        if not name:
            raise InvalidInput("Image name is required")
        if len(name) > IMAGE_NAME_MAX_LENGTH:
            raise InvalidInput(f"Image name must be at most {IMAGE_NAME_MAX_LENGTH} characters")

        image_id = self.image_repo.create(gallery_id, url, name, user_id)
        return self.image_repo.get_by_id(image_id)

    def list_images(self, gallery_id: str, user_id: Optional[str]) -> List[dict]:
        self.access.authorize(gallery_id, user_id, VIEW)
        return self.image_repo.list_for_gallery(gallery_id)

    def get_image(self, image_id: str, user_id: Optional[str]) -> dict:
        require_identity(user_id)
        image = self._get_image(image_id)
        self.access.authorize(image["gallery_id"], user_id, VIEW)
        return image

    def delete_image(self, image_id: str, user_id: Optional[str]) -> None:
        """Delete an image. Any editor may delete, not only the uploader."""
        require_identity(user_id)
        image = self._get_image(image_id)
        self.access.authorize(image["gallery_id"], user_id, EDIT)
        self.image_repo.delete(image_id)

    def _get_image(self, image_id: str) -> dict:
        image = self.image_repo.get_by_id(image_id)
        if not image:
            raise NotFound("Image not found")
        return image

    def _validate_name(self, name: Optional[str]) -> str:
        name = (name or "").strip()
        if not name:
            raise InvalidInput("Gallery name is required")
        if len(name) > GALLERY_NAME_MAX_LENGTH:
            raise InvalidInput(f"Gallery name must be at most {GALLERY_NAME_MAX_LENGTH} characters")
        return name

    def _validate_description(self, description: Optional[str]) -> str:
        description = (description or "").strip()
        if len(description) > GALLERY_DESCRIPTION_MAX_LENGTH:
            raise InvalidInput(
                f"Description must be at most {GALLERY_DESCRIPTION_MAX_LENGTH} characters"
            )
        return description
