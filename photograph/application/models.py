"""Domain types shared by services and repositories.

Roles form a closed, ordered set. A collaborator row is identified either
by a pending invitee (email not yet matched to an account) or by an active
member (a real user id); the storage encoding of that distinction is private
to the collaborator repository.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import InvalidInput


class Role(str, Enum):
    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value) -> "Role":
        """Parse a role name, raising InvalidInput for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            raise InvalidInput("Role must be 'viewer', 'editor' or 'admin'")

    def at_least(self, other: "Role") -> bool:
        """True if this role is as permissive as ``other`` or more."""
        return ROLE_HIERARCHY[self] >= ROLE_HIERARCHY[other]


ROLE_HIERARCHY = {Role.VIEWER: 1, Role.EDITOR: 2, Role.ADMIN: 3}


@dataclass(frozen=True)
class Identity:
    """Caller identity as supplied by the identity provider."""
    user_id: str
    verified_email: Optional[str] = None


@dataclass(frozen=True)
class Access:
    """Effective permissions of one caller on one gallery."""
    is_owner: bool
    role: Optional[Role] = None

    @property
    def can_view(self) -> bool:
        return self.is_owner or self.role is not None

    @property
    def can_edit(self) -> bool:
        return self.is_owner or (self.role is not None and self.role.at_least(Role.EDITOR))

    @property
    def can_admin(self) -> bool:
        return self.is_owner or self.role == Role.ADMIN

    @property
    def label(self) -> Optional[str]:
        if self.is_owner:
            return "owner"
        return self.role.value if self.role else None


NO_ACCESS = Access(is_owner=False, role=None)


@dataclass(frozen=True)
class PendingInvitee:
    email: str


@dataclass(frozen=True)
class ActiveMember:
    user_id: str


Member = Union[PendingInvitee, ActiveMember]


@dataclass(frozen=True)
class Collaborator:
    gallery_id: str
    member: Member
    role: Role
    email: Optional[str]
    invited_by: str
    invited_at: Optional[str]
    updated_at: Optional[str]

    @property
    def is_pending(self) -> bool:
        return isinstance(self.member, PendingInvitee)

    def to_dict(self) -> dict:
        return {
            "gallery_id": self.gallery_id,
            "status": "pending" if self.is_pending else "active",
            "user_id": None if self.is_pending else self.member.user_id,
            "email": self.email,
            "role": self.role.value,
            "invited_by": self.invited_by,
            "invited_at": self.invited_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class InviteResult:
    """Outcome of an invitation.

    ``status`` is "pending" while the email is not matched to an account,
    "added" when the invitee was resolved to a member straight away.
    """
    status: str
    collaborator: Collaborator

    @property
    def pending(self) -> bool:
        return self.status == "pending"


def normalize_email(email) -> str:
    return (email or "").strip().lower()
