"""Main FastAPI application for SkillBadges."""

import logging
import sys
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import badges
from .config import settings
from .database import get_sync_session
from .errors import BadgeError, error_envelope
from .store import SqlBadgeStore


def _configure_logging() -> None:
    """Set up application-level logging."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    fmt = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("watchfiles").setLevel(logging.WARNING)


_configure_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="SkillBadges",
    description="Student skill badge service",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(badges.router, prefix=settings.api_prefix)


# ─── Error envelopes ───


def _error(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_envelope(message, error))


@app.exception_handler(BadgeError)
async def badge_error_handler(request: Request, exc: BadgeError):
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error,
            exc_info=exc,
        )
    else:
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message, exc.error)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _error(400, "Invalid request", details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error", str(exc))


@app.on_event("startup")
async def startup_event():
    """Initialize the application on startup."""
    if settings.auto_create_schema:
        with get_sync_session() as session:
            SqlBadgeStore(session).ensure_schema()


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "SkillBadges",
        "version": __version__,
        "description": "Student skill badge service",
        "status": "running",
    }


@app.get("/healthz")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": time.time()}


# CLI function for running the server
def cli():
    """Command-line interface for running SkillBadges."""
    import uvicorn

    uvicorn.run(
        "skillbadges.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
