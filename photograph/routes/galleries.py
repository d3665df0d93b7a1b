"""Gallery and image routes."""
from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..database import get_db
from ..dependencies import require_user
from .deps import get_gallery_service

router = APIRouter(prefix="/api", tags=["galleries"])


# Pydantic models for request validation
class GalleryCreate(BaseModel):
    name: str
    description: str | None = None


class GalleryUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    cover_photo_url: str | None = None
    cover_color: str | None = None  # '#rrggbb'


class ImageCreate(BaseModel):
    url: str
    name: str


# === Galleries ===

@router.get("/galleries")
def list_galleries(request: Request):
    """Galleries owned by or shared with the current user."""
    user = require_user(request)
    service = get_gallery_service(get_db())
    return {"galleries": service.list_galleries(user["id"])}


@router.post("/galleries")
def create_gallery(request: Request, data: GalleryCreate):
    """Create a gallery; the caller becomes its owner."""
    user = require_user(request)
    service = get_gallery_service(get_db())
    gallery = service.create_gallery(user["id"], data.name, data.description or "")
    return {"status": "ok", "gallery": gallery}


@router.get("/galleries/{gallery_id}")
def get_gallery(request: Request, gallery_id: str):
    user = require_user(request)
    service = get_gallery_service(get_db())
    return service.get_gallery(gallery_id, user["id"])


@router.put("/galleries/{gallery_id}")
def update_gallery(request: Request, gallery_id: str, data: GalleryUpdate):
    """Update gallery metadata or cover (owner, editor or admin)."""
    user = require_user(request)
    service = get_gallery_service(get_db())
    gallery = service.update_gallery(gallery_id, user["id"], data.model_dump(exclude_unset=True))
    return {"status": "ok", "gallery": gallery}


@router.delete("/galleries/{gallery_id}")
def delete_gallery(request: Request, gallery_id: str):
    """Delete gallery, its images and collaborators (owner only)."""
    user = require_user(request)
    service = get_gallery_service(get_db())
    service.delete_gallery(gallery_id, user["id"])
    return {"status": "ok"}


@router.get("/galleries/{gallery_id}/role")
def get_gallery_role(request: Request, gallery_id: str):
    """The current user's role on the gallery: owner, admin, editor or viewer."""
    user = require_user(request)
    service = get_gallery_service(get_db())
    return {"role": service.get_role(gallery_id, user["id"])}


# === Images ===

@router.get("/galleries/{gallery_id}/images")
def list_gallery_images(request: Request, gallery_id: str):
    user = require_user(request)
    service = get_gallery_service(get_db())
    return {"images": service.list_images(gallery_id, user["id"])}


@router.post("/galleries/{gallery_id}/images")
def add_gallery_image(request: Request, gallery_id: str, data: ImageCreate):
    """Record an uploaded image (url and filename from the upload pipeline)."""
    user = require_user(request)
    service = get_gallery_service(get_db())
    image = service.add_image(gallery_id, user["id"], data.url, data.name)
    return {"status": "ok", "image": image}


@router.get("/images/{image_id}")
def get_image(request: Request, image_id: str):
    user = require_user(request)
    service = get_gallery_service(get_db())
    return service.get_image(image_id, user["id"])


@router.delete("/images/{image_id}")
def delete_image(request: Request, image_id: str):
    user = require_user(request)
    service = get_gallery_service(get_db())
    service.delete_image(image_id, user["id"])
    return {"status": "ok"}
