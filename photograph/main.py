"""Photograph - FastAPI Entry Point."""
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .application.errors import GalleryError
from .config import HOST, LOG_LEVEL, PORT, logger
from .database import init_db
from .infrastructure.database import close_async_db
from .middleware import IdentityMiddleware

# Import routers
from .routes.galleries import router as galleries_router
from .routes.collaborators import router as collaborators_router
from .routes.invitations import router as invitations_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    init_db()
    yield
    await close_async_db()


app = FastAPI(title="Photograph", lifespan=lifespan)

app.add_middleware(IdentityMiddleware)


@app.exception_handler(GalleryError)
async def gallery_error_handler(request: Request, exc: GalleryError):
    """Typed service failures keep their own status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(sqlite3.Error)
async def storage_error_handler(request: Request, exc: sqlite3.Error):
    """Store failures are logged and never shown to the caller."""
    logger.exception(f"Storage error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/health")
def health():
    return {"status": "ok"}


# Include routers
app.include_router(galleries_router)
app.include_router(collaborators_router)
app.include_router(invitations_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
