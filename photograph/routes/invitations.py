"""Invitation routes for the invitee: list, accept, decline.

The email an invitation is matched against always comes from the identity
provider. A client may repeat it in the body, but it must be the same.
"""
from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..database import get_db
from ..dependencies import require_identity
from ..infrastructure.database import async_connection
from .deps import get_invitation_service

router = APIRouter(prefix="/api/invitations", tags=["invitations"])


class InvitationAnswer(BaseModel):
    gallery_id: str
    email: str | None = None


@router.get("")
async def list_pending_invitations(request: Request):
    """Pending invitations for the current user's verified email.

    Polled by clients to surface new invitations.
    """
    identity = require_identity(request)
    async with async_connection() as conn:
        service = get_invitation_service(async_db=conn)
        invitations = await service.list_pending_for_email(identity)
    return {"invitations": invitations}


@router.post("/accept")
def accept_invitation(request: Request, data: InvitationAnswer):
    identity = require_identity(request)
    service = get_invitation_service(get_db())
    collaborator = service.accept(data.gallery_id, identity, data.email)
    return {"success": True, "message": "Invitation accepted", "collaborator": collaborator.to_dict()}


@router.post("/decline")
def decline_invitation(request: Request, data: InvitationAnswer):
    identity = require_identity(request)
    service = get_invitation_service(get_db())
    service.decline(data.gallery_id, identity, data.email)
    return {"success": True, "message": "Invitation declined"}
