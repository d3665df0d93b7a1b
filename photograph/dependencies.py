"""Shared FastAPI dependencies."""
from fastapi import Request

from .application.errors import Unauthenticated
from .application.models import Identity


def get_current_user(request: Request) -> dict | None:
    """Get current user from request state."""
    return getattr(request.state, "user", None)


def require_user(request: Request) -> dict:
    """Require authenticated user, raise 401 if not authenticated."""
    user = get_current_user(request)
    if not user:
        raise Unauthenticated()
    return user


def require_identity(request: Request) -> Identity:
    """Caller identity with the verified email, if the provider sent one."""
    user = require_user(request)
    return Identity(user_id=user["id"], verified_email=user.get("email"))
