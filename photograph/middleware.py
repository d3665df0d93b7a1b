"""Application middleware."""
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import PUBLIC_PATHS, USER_ID_HEADER, VERIFIED_EMAIL_HEADER


class IdentityMiddleware(BaseHTTPMiddleware):
    """Attach the caller identity forwarded by the identity provider.

    The authenticating proxy in front of the service sets the user id header
    for every authenticated request, and the email header only for verified
    addresses. Requests without an identity are rejected here, before any
    route touches the database.
    """

    async def dispatch(self, request: Request, call_next):
        user_id = (request.headers.get(USER_ID_HEADER) or "").strip()
        email = (request.headers.get(VERIFIED_EMAIL_HEADER) or "").strip().lower()

        request.state.user = {"id": user_id, "email": email or None} if user_id else None

        path = request.url.path
        if request.state.user is None and path not in PUBLIC_PATHS:
            return JSONResponse(status_code=401, content={"detail": "Not authenticated"})

        return await call_next(request)
