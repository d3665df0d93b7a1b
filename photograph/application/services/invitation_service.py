"""Invitation service - lifecycle of collaboration invitations.

An invitation is created for an email address and stays pending until the
owner of that address, as verified by the identity provider, accepts or
declines it:

    NonExistent -> Pending -> Active      (accept)
                           -> NonExistent (decline, or removal by an admin)

Accept and decline are at-most-once; a second call finds no pending row.
"""
import sqlite3
from typing import Optional

from ...config import logger
from ...infrastructure.repositories import CollaboratorRepository, AsyncCollaboratorRepository
from ..errors import Conflict, Forbidden, InvalidInput, NotFound
from ..models import ActiveMember, Collaborator, Identity, InviteResult, Role, normalize_email
from .access_service import AccessService, ADMIN, require_identity


class InvitationService:
    """Service for inviting collaborators and answering invitations.

    Responsibilities:
    - Create or refresh pending invitations (owner/admin only)
    - Accept or decline an invitation addressed to the caller's verified email
    - List the caller's pending invitations
    """

    def __init__(
        self,
        access_service: Optional[AccessService] = None,
        collaborator_repository: Optional[CollaboratorRepository] = None,
        pending_reader: Optional[AsyncCollaboratorRepository] = None
    ):
        """Sync collaborators serve invite/accept/decline, ``pending_reader`` the listing."""
        self.access = access_service
        self.collab_repo = collaborator_repository
        self.pending_reader = pending_reader

    def invite(
        self,
        gallery_id: str,
        inviter: Identity,
        email: str,
        role
    ) -> InviteResult:
        """Invite an email address to a gallery.

        Re-inviting an address that is still pending overwrites the role and
        timestamps of the existing invitation.

        Args:
            gallery_id: Gallery to share
            inviter: Caller identity (must be owner or admin)
            email: Address to invite
            role: 'viewer', 'editor' or 'admin'

        Returns:
            InviteResult with status "pending"

        Raises:
            Forbidden: Inviter is not owner or admin
            InvalidInput: Bad email or role, or inviting yourself
            Conflict: The address already belongs to an active collaborator
        """
        self.access.authorize(gallery_id, inviter.user_id, ADMIN)

        email = normalize_email(email)
        if not email or "@" not in email:
            raise InvalidInput("Valid email required")
        role = Role.parse(role)

        if inviter.verified_email and normalize_email(inviter.verified_email) == email:
            raise InvalidInput("Cannot invite yourself")

        if self.collab_repo.find_active_by_email(gallery_id, email):
            raise Conflict(f"{email} already collaborates on this gallery")

        collaborator = self.collab_repo.upsert_pending(
            gallery_id, email, role, invited_by=inviter.user_id
        )
        logger.info(f"Invited {email} as {role.value} to gallery {gallery_id} by {inviter.user_id}")
        return InviteResult(status="pending", collaborator=collaborator)

    def accept(
        self,
        gallery_id: str,
        identity: Identity,
        email: Optional[str] = None
    ) -> Collaborator:
        """Accept the pending invitation addressed to the caller.

        The row is rewritten in one statement; if two accepts race, only
        one finds the pending row.

        Raises:
            Forbidden: No verified email, or ``email`` differs from it
            NotFound: Gallery or pending invitation does not exist
            Conflict: Caller owns the gallery (any invitation to the owner's
                address is removed) or already collaborates on it
        """
        require_identity(identity.user_id)
        email = self._bound_email(identity, email)
        gallery = self.access.get_gallery(gallery_id)
        if gallery["user_id"] == identity.user_id:
            # An admin may have invited the owner's address; drop that row
            self.collab_repo.delete_pending(gallery_id, email)
            raise Conflict("The gallery owner cannot accept an invitation to it")

        try:
            accepted = self.collab_repo.resolve_pending(gallery_id, email, identity.user_id)
        except sqlite3.IntegrityError:
            raise Conflict("You already collaborate on this gallery")
        if not accepted:
            raise NotFound("Invitation not found")

        logger.info(f"User {identity.user_id} accepted invitation to gallery {gallery_id}")
        return self.collab_repo.get(gallery_id, ActiveMember(user_id=identity.user_id))

    def decline(
        self,
        gallery_id: str,
        identity: Identity,
        email: Optional[str] = None
    ) -> None:
        """Decline the pending invitation addressed to the caller.

        The gallery is simply no longer shared with that address; it can be
        invited again later.
        """
        require_identity(identity.user_id)
        email = self._bound_email(identity, email)
        if not self.collab_repo.delete_pending(gallery_id, email):
            raise NotFound("Invitation not found")
        logger.info(f"User {identity.user_id} declined invitation to gallery {gallery_id}")

    async def list_pending_for_email(self, identity: Identity) -> list[dict]:
        """Pending invitations addressed to the caller's verified email."""
        require_identity(identity.user_id)
        email = self._bound_email(identity, None)
        return await self.pending_reader.list_pending_for_email(email)

    def _bound_email(self, identity: Identity, email: Optional[str]) -> str:
        """The verified email of the caller, checked against a supplied one."""
        verified = normalize_email(identity.verified_email)
        if not verified:
            raise Forbidden("A verified email address is required")
        if email is not None and normalize_email(email) != verified:
            raise Forbidden("Invitation email does not match your verified email")
        return verified
