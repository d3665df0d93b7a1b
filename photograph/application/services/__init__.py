"""Application services - business logic layer."""

from .access_service import AccessService
from .gallery_service import GalleryService
from .invitation_service import InvitationService
from .collaborator_service import CollaboratorService

__all__ = [
    "AccessService",
    "GalleryService",
    "InvitationService",
    "CollaboratorService",
]
