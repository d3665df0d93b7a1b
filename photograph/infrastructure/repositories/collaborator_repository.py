"""Collaborator repository - gallery sharing and invitations.

One row per (gallery, identity). The identity slot holds either a real user
id or, for an invitation not yet accepted, the sentinel ``pending-<email>``.
The sentinel never leaves this module: rows are returned as
``Collaborator`` objects whose ``member`` is a ``PendingInvitee`` or an
``ActiveMember``.

Accepting and declining are single conditional statements keyed by the
(gallery_id, user_id) primary key, so two concurrent calls cannot both
succeed; the affected-row count tells the caller which one won.
"""
from ...application.models import (
    ActiveMember, Collaborator, Member, PendingInvitee, Role
)
from .base import Repository, AsyncRepository

PENDING_PREFIX = "pending-"


def encode_member(member: Member) -> str:
    """Storage value of the identity slot."""
    if isinstance(member, PendingInvitee):
        return PENDING_PREFIX + member.email
    return member.user_id


def is_addressable(member: Member) -> bool:
    """False for an active id that would collide with the pending sentinel.

    Such an id matches no row; pending rows are only reachable as
    ``PendingInvitee``.
    """
    return isinstance(member, PendingInvitee) or not member.user_id.startswith(PENDING_PREFIX)


def decode_member(user_id: str, email: str | None) -> Member:
    if user_id.startswith(PENDING_PREFIX):
        return PendingInvitee(email=email or user_id[len(PENDING_PREFIX):])
    return ActiveMember(user_id=user_id)


def row_to_collaborator(row) -> Collaborator | None:
    if not row:
        return None
    return Collaborator(
        gallery_id=row["gallery_id"],
        member=decode_member(row["user_id"], row["email"]),
        role=Role(row["role"]),
        email=row["email"],
        invited_by=row["invited_by"],
        invited_at=row["invited_at"],
        updated_at=row["updated_at"],
    )


class CollaboratorRepository(Repository):
    """Repository for gallery collaborator rows.

    Examples:
        >>> repo = CollaboratorRepository(db)
        >>> repo.upsert_pending(gallery_id, "bob@x.com", Role.EDITOR, invited_by=owner_id)
        >>> repo.resolve_pending(gallery_id, "bob@x.com", "u_bob")
        True
        >>> repo.get_active_role(gallery_id, "u_bob")
        <Role.EDITOR: 'editor'>
    """

    def get(self, gallery_id: str, member: Member) -> Collaborator | None:
        """Get one collaborator row by its identity slot."""
        if not is_addressable(member):
            return None
        cursor = self._execute(
            "SELECT * FROM gallery_collaborators WHERE gallery_id = ? AND user_id = ?",
            (gallery_id, encode_member(member))
        )
        return row_to_collaborator(cursor.fetchone())

    def get_active_role(self, gallery_id: str, user_id: str) -> Role | None:
        """Role of a resolved collaborator, or None.

        Pending rows never grant a role.
        """
        if not user_id or user_id.startswith(PENDING_PREFIX):
            return None
        cursor = self._execute(
            "SELECT role FROM gallery_collaborators WHERE gallery_id = ? AND user_id = ?",
            (gallery_id, user_id)
        )
        row = cursor.fetchone()
        return Role(row["role"]) if row else None

    def find_active_by_email(self, gallery_id: str, email: str) -> Collaborator | None:
        """Active collaborator that was invited under ``email``, if any."""
        cursor = self._execute(
            """SELECT * FROM gallery_collaborators
               WHERE gallery_id = ? AND email = ? AND user_id NOT LIKE ?""",
            (gallery_id, email, PENDING_PREFIX + "%")
        )
        return row_to_collaborator(cursor.fetchone())

    def upsert_pending(
        self,
        gallery_id: str,
        email: str,
        role: Role,
        invited_by: str
    ) -> Collaborator:
        """Create a pending invitation, or refresh an existing one.

        A repeated invite for the same email overwrites role, inviter and
        timestamps; the row count stays at one.
        """
        member = PendingInvitee(email=email)
        with self.transaction():
            self._execute(
                """INSERT INTO gallery_collaborators
                   (gallery_id, user_id, role, email, invited_by)
                   VALUES (?, ?, ?, ?, ?)
                   ON CONFLICT(gallery_id, user_id)
                   DO UPDATE SET
                       role = excluded.role,
                       invited_by = excluded.invited_by,
                       invited_at = CURRENT_TIMESTAMP,
                       updated_at = CURRENT_TIMESTAMP""",
                (gallery_id, encode_member(member), Role(role).value, email, invited_by)
            )
        return self.get(gallery_id, member)

    def resolve_pending(self, gallery_id: str, email: str, user_id: str) -> bool:
        """Turn a pending invitation into an active collaborator.

        Role, inviter and invitation time are kept. Raises
        sqlite3.IntegrityError if ``user_id`` already has a row for the gallery.

        Returns:
            True if a pending row was rewritten, False if none matched
        """
        if user_id.startswith(PENDING_PREFIX):
            return False
        with self.transaction():
            cursor = self._execute(
                """UPDATE gallery_collaborators
                   SET user_id = ?, updated_at = CURRENT_TIMESTAMP
                   WHERE gallery_id = ? AND user_id = ?""",
                (user_id, gallery_id, encode_member(PendingInvitee(email=email)))
            )
        return cursor.rowcount > 0

    def delete_pending(self, gallery_id: str, email: str) -> bool:
        """Delete a pending invitation.

        Returns:
            True if a pending row existed and was removed
        """
        return self.delete(gallery_id, PendingInvitee(email=email))

    def update_role(self, gallery_id: str, member: Member, role: Role) -> bool:
        """Change the role of a pending or active collaborator.

        Returns:
            True if the row existed and was updated
        """
        if not is_addressable(member):
            return False
        cursor = self._execute(
            """UPDATE gallery_collaborators
               SET role = ?, updated_at = CURRENT_TIMESTAMP
               WHERE gallery_id = ? AND user_id = ?""",
            (Role(role).value, gallery_id, encode_member(member))
        )
        self._commit()
        return cursor.rowcount > 0

    def delete(self, gallery_id: str, member: Member) -> bool:
        """Remove a pending or active collaborator row.

        Returns:
            True if the row existed and was removed
        """
        if not is_addressable(member):
            return False
        cursor = self._execute(
            "DELETE FROM gallery_collaborators WHERE gallery_id = ? AND user_id = ?",
            (gallery_id, encode_member(member))
        )
        self._commit()
        return cursor.rowcount > 0

    def list_for_gallery(self, gallery_id: str) -> list[Collaborator]:
        """All collaborator rows of a gallery, oldest invitation first."""
        cursor = self._execute(
            """SELECT * FROM gallery_collaborators
               WHERE gallery_id = ?
               ORDER BY invited_at, email""",
            (gallery_id,)
        )
        return [row_to_collaborator(row) for row in cursor.fetchall()]


class AsyncCollaboratorRepository(AsyncRepository):
    """Async reads of pending invitations, used by invitation polling."""

    async def list_pending_for_email(self, email: str) -> list[dict]:
        """Pending invitations addressed to ``email`` across all galleries.

        Returns:
            List of dicts with gallery_id, gallery_name, role, email,
            invited_by and invited_at
        """
        return await self._fetchall(
            """SELECT gc.gallery_id, g.name AS gallery_name, gc.role, gc.email,
                      gc.invited_by, gc.invited_at
               FROM gallery_collaborators gc
               JOIN galleries g ON g.id = gc.gallery_id
               WHERE gc.email = ? AND gc.user_id = ?
               ORDER BY gc.invited_at DESC""",
            (email, encode_member(PendingInvitee(email=email)))
        )
