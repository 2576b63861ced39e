"""FastAPI application entry point for LPG Connect.

Users register, log in and submit LPG connection requests; administrators
review them and approve, reject or delete them. Storage is a relational
database when one is reachable and an in-memory store otherwise.

Run with: uvicorn lpg_connect.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lpg_connect.config import settings
from lpg_connect.errors import StorageError
from lpg_connect.routers.admin import router as admin_router
from lpg_connect.routers.applications import router as applications_router
from lpg_connect.routers.auth import router as auth_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description=(
        "Registration, submission and administrative review of LPG gas "
        "connection requests."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)
app.state.store = None

app.include_router(auth_router)
app.include_router(applications_router)
app.include_router(admin_router)


@app.on_event("startup")
def on_startup():  # pragma: no cover
    """Select the storage backend once, unless one was injected already."""
    from lpg_connect.stores.factory import create_store

    if app.state.store is None:
        app.state.store = create_store(settings)


@app.exception_handler(StorageError)
def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Request %s %s failed in storage: %s",
                 request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage is temporarily unavailable. Please try again."},
    )


@app.get("/", tags=["Health"])
def health_check():
    """Health check endpoint to verify the service is running."""
    return {"status": "healthy", "service": settings.APP_NAME}
