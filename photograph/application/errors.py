"""Typed failures raised by the service layer.

Each failure carries the HTTP status the gateway answers with, so the
routes never need to translate them by hand.
"""


class GalleryError(Exception):
    """Base class for failures surfaced to callers."""

    status_code = 500
    default_detail = "Internal Server Error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(GalleryError):
    status_code = 401
    default_detail = "Not authenticated"


class Forbidden(GalleryError):
    status_code = 403
    default_detail = "Access denied"


class NotFound(GalleryError):
    status_code = 404
    default_detail = "Not found"


class InvalidInput(GalleryError):
    status_code = 400
    default_detail = "Invalid input"


class Conflict(GalleryError):
    status_code = 409
    default_detail = "Conflict"
