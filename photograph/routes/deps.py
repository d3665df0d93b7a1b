"""Shared dependencies for API routes.

Factory functions creating services over a database connection.
"""
from ..application.services import (
    AccessService, GalleryService, InvitationService, CollaboratorService
)
from ..infrastructure.repositories import (
    GalleryRepository, CollaboratorRepository, AsyncCollaboratorRepository, ImageRepository
)


def get_access_service(db) -> AccessService:
    """Create AccessService with repositories."""
    return AccessService(
        gallery_repository=GalleryRepository(db),
        collaborator_repository=CollaboratorRepository(db)
    )


def get_gallery_service(db) -> GalleryService:
    """Create GalleryService with repositories."""
    return GalleryService(
        gallery_repository=GalleryRepository(db),
        image_repository=ImageRepository(db),
        access_service=get_access_service(db)
    )


def get_invitation_service(db=None, async_db=None) -> InvitationService:
    """Create InvitationService.

    ``db`` backs invite/accept/decline, ``async_db`` the pending-invitation
    listing; an async route passes only ``async_db`` and never opens a
    blocking connection.
    """
    return InvitationService(
        access_service=get_access_service(db) if db is not None else None,
        collaborator_repository=CollaboratorRepository(db) if db is not None else None,
        pending_reader=AsyncCollaboratorRepository(async_db) if async_db is not None else None
    )


def get_collaborator_service(db) -> CollaboratorService:
    """Create CollaboratorService with repositories."""
    return CollaboratorService(
        access_service=get_access_service(db),
        collaborator_repository=CollaboratorRepository(db)
    )
