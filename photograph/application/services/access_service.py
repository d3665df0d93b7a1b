"""Access service - decides what a caller may do with a gallery.

Every gallery, image and collaborator operation goes through this service,
so there is exactly one place where ownership and roles are interpreted.
"""
from typing import Optional, Tuple

from ...config import logger
from ...infrastructure.repositories import GalleryRepository, CollaboratorRepository
from ..errors import Forbidden, NotFound, Unauthenticated
from ..models import Access, NO_ACCESS

# Predicates, named after the Access properties they read
VIEW = "can_view"
EDIT = "can_edit"
ADMIN = "can_admin"
OWNER = "is_owner"

DENIAL_MESSAGES = {
    VIEW: "Access denied",
    EDIT: "Edit access required",
    ADMIN: "Only gallery owners and admins can manage collaborators",
    OWNER: "Only the gallery owner can do this",
}


def require_identity(user_id: Optional[str]) -> str:
    """Fail with Unauthenticated before anything touches the store."""
    if not user_id:
        raise Unauthenticated()
    return user_id


class AccessService:
    """Access evaluator for galleries.

    Responsibilities:
    - Resolve a caller's effective access (owner flag and role)
    - Enforce the gateway sequence: identity, gallery lookup, predicate
    """

    def __init__(
        self,
        gallery_repository: GalleryRepository,
        collaborator_repository: CollaboratorRepository
    ):
        self.gallery_repo = gallery_repository
        self.collab_repo = collaborator_repository

    def access_for(self, gallery: dict, user_id: str) -> Access:
        """Effective access of ``user_id`` on an already loaded gallery.

        Ownership is read from the gallery row only; a collaborator row for
        the owner, should one exist, is never consulted.
        """
        if gallery["user_id"] == user_id:
            return Access(is_owner=True)
        role = self.collab_repo.get_active_role(gallery["id"], user_id)
        return Access(is_owner=False, role=role) if role else NO_ACCESS

    def get_gallery(self, gallery_id: str) -> dict:
        """Load a gallery or raise NotFound."""
        gallery = self.gallery_repo.get_by_id(gallery_id)
        if not gallery:
            raise NotFound("Gallery not found")
        return gallery

    def resolve_access(self, gallery_id: str, user_id: str) -> Access:
        """Effective access of a caller on a gallery.

        Raises:
            NotFound: If the gallery does not exist
        """
        return self.access_for(self.get_gallery(gallery_id), user_id)

    def load(self, gallery_id: str, user_id: Optional[str]) -> Tuple[dict, Access]:
        """Authenticate, load the gallery and resolve access, without judging it."""
        require_identity(user_id)
        gallery = self.get_gallery(gallery_id)
        return gallery, self.access_for(gallery, user_id)

    def authorize(
        self,
        gallery_id: str,
        user_id: Optional[str],
        predicate: str = VIEW,
        message: Optional[str] = None
    ) -> Tuple[dict, Access]:
        """Run the gateway checks for one operation.

        Args:
            gallery_id: Target gallery
            user_id: Caller identity
            predicate: One of VIEW, EDIT, ADMIN, OWNER
            message: Denial message overriding the default for the predicate

        Returns:
            (gallery dict, Access)

        Raises:
            Unauthenticated: No caller identity
            NotFound: Gallery does not exist
            Forbidden: Caller lacks the required access
        """
        gallery, access = self.load(gallery_id, user_id)
        if not getattr(access, predicate):
            logger.warning(
                f"Denied {predicate} on gallery {gallery_id} for user {user_id} "
                f"(role={access.label})"
            )
            raise Forbidden(message or DENIAL_MESSAGES[predicate])
        return gallery, access
