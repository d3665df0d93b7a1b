"""Gallery sharing routes: invitations sent by owners/admins and collaborator management."""
from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..application.models import ActiveMember, PendingInvitee, normalize_email
from ..database import get_db
from ..dependencies import require_user, require_identity
from .deps import get_invitation_service, get_collaborator_service

router = APIRouter(prefix="/api/galleries/{gallery_id}", tags=["collaborators"])


class InvitationCreate(BaseModel):
    email: str
    role: str = "viewer"  # 'viewer' | 'editor' | 'admin'


class RoleUpdate(BaseModel):
    role: str


@router.get("/collaborators")
def list_collaborators(request: Request, gallery_id: str):
    """Active collaborators and pending invitations (owner or admin only)."""
    user = require_user(request)
    service = get_collaborator_service(get_db())
    groups = service.list_collaborators(gallery_id, user["id"])
    return {
        "active": [c.to_dict() for c in groups["active"]],
        "pending": [c.to_dict() for c in groups["pending"]],
    }


@router.post("/collaborators")
def invite_collaborator(request: Request, gallery_id: str, data: InvitationCreate):
    """Invite an email address to the gallery (owner or admin only)."""
    identity = require_identity(request)
    service = get_invitation_service(get_db())
    result = service.invite(gallery_id, identity, data.email, data.role)
    return {
        "success": True,
        "pending": result.pending,
        "collaborator": result.collaborator.to_dict(),
    }


@router.put("/collaborators/{user_id}")
def update_collaborator_role(request: Request, gallery_id: str, user_id: str, data: RoleUpdate):
    user = require_user(request)
    service = get_collaborator_service(get_db())
    collaborator = service.update_role(gallery_id, user["id"], ActiveMember(user_id=user_id), data.role)
    return {"status": "ok", "collaborator": collaborator.to_dict()}


@router.delete("/collaborators/{user_id}")
def remove_collaborator(request: Request, gallery_id: str, user_id: str):
    """Remove a collaborator. Collaborators may always remove themselves."""
    user = require_user(request)
    service = get_collaborator_service(get_db())
    service.remove(gallery_id, user["id"], ActiveMember(user_id=user_id))
    return {"status": "ok", "left": user_id == user["id"]}


@router.put("/pending/{email}")
def update_pending_role(request: Request, gallery_id: str, email: str, data: RoleUpdate):
    """Change the role offered by a pending invitation."""
    user = require_user(request)
    service = get_collaborator_service(get_db())
    collaborator = service.update_role(
        gallery_id, user["id"], PendingInvitee(email=normalize_email(email)), data.role
    )
    return {"status": "ok", "collaborator": collaborator.to_dict()}


@router.delete("/pending/{email}")
def retract_invitation(request: Request, gallery_id: str, email: str):
    """Retract a pending invitation."""
    user = require_user(request)
    service = get_collaborator_service(get_db())
    service.remove(gallery_id, user["id"], PendingInvitee(email=normalize_email(email)))
    return {"status": "ok"}
