# Repository Pattern Implementation
"""
Repositories abstract database operations.
Each entity has its own repository.

Usage:
    repo = GalleryRepository(get_db())
    gallery = repo.get_by_id(gallery_id)
"""
from .base import Repository, AsyncRepository, ConnectionProtocol
from .gallery_repository import GalleryRepository
from .collaborator_repository import CollaboratorRepository, AsyncCollaboratorRepository
from .image_repository import ImageRepository

__all__ = [
    "Repository",
    "AsyncRepository",
    "ConnectionProtocol",
    "GalleryRepository",
    "CollaboratorRepository",
    "AsyncCollaboratorRepository",
    "ImageRepository",
]
