"""Collaborator service - role changes, removal and listing.

Managing collaborators needs owner or admin access. The one exception is
leaving: an active collaborator may always remove themselves.
"""
from typing import Optional

from ...config import logger
from ...infrastructure.repositories import CollaboratorRepository
from ..errors import Forbidden, NotFound
from ..models import ActiveMember, Collaborator, Member, Role
from .access_service import AccessService, ADMIN


class CollaboratorService:
    """Service for administering a gallery's collaborators."""

    def __init__(
        self,
        access_service: AccessService,
        collaborator_repository: CollaboratorRepository
    ):
        self.access = access_service
        self.collab_repo = collaborator_repository

    def update_role(
        self,
        gallery_id: str,
        acting_user_id: Optional[str],
        target: Member,
        new_role
    ) -> Collaborator:
        """Change the role of a pending or active collaborator.

        Args:
            gallery_id: Gallery ID
            acting_user_id: Caller (must be owner or admin)
            target: PendingInvitee or ActiveMember to update
            new_role: 'viewer', 'editor' or 'admin'

        Returns:
            The updated collaborator

        Raises:
            Forbidden: Caller is not owner or admin
            InvalidInput: Unknown role
            NotFound: No such collaborator row
        """
        self.access.authorize(gallery_id, acting_user_id, ADMIN)
        role = Role.parse(new_role)

        if not self.collab_repo.update_role(gallery_id, target, role):
            raise NotFound("Collaborator not found")

        logger.info(f"Role of {target} on gallery {gallery_id} set to {role.value} by {acting_user_id}")
        return self.collab_repo.get(gallery_id, target)

    def remove(
        self,
        gallery_id: str,
        acting_user_id: Optional[str],
        target: Member
    ) -> None:
        """Remove a collaborator or retract a pending invitation.

        Raises:
            Forbidden: Caller is neither owner/admin nor removing themselves
            NotFound: No such collaborator row
        """
        _, access = self.access.load(gallery_id, acting_user_id)
        is_self = isinstance(target, ActiveMember) and target.user_id == acting_user_id
        if not (access.can_admin or is_self):
            logger.warning(f"Denied removal of {target} from gallery {gallery_id} for {acting_user_id}")
            raise Forbidden("Only gallery owners and admins can remove other collaborators")

        if not self.collab_repo.delete(gallery_id, target):
            raise NotFound("Collaborator not found")

        logger.info(f"Removed {target} from gallery {gallery_id} by {acting_user_id}")

    def list_collaborators(self, gallery_id: str, caller_id: Optional[str]) -> dict:
        """All collaborators of a gallery, split into active and pending.

        Only the owner and admins may see who else has access.
        """
        self.access.authorize(
            gallery_id, caller_id, ADMIN,
            message="Only gallery owners and admins can view collaborators"
        )
        collaborators = self.collab_repo.list_for_gallery(gallery_id)
        return {
            "active": [c for c in collaborators if not c.is_pending],
            "pending": [c for c in collaborators if c.is_pending],
        }
