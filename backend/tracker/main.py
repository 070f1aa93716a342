"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from tracker.api.routes import (
    backup,
    notes,
    progress,
    projects,
    resources,
    roadmap,
    uploads,
    user_settings,
)
from tracker.core.config import get_settings
from tracker.core.errors import TrackerError
from tracker.core.logging import configure_logging, get_logger
from tracker.core.storage import init_store
from tracker.schemas.common import fail

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    configure_logging(debug=settings.DEBUG)
    logger.info(
        "Starting Roadmap Tracker",
        version=settings.APP_VERSION,
        env=settings.ENV,
        debug=settings.DEBUG,
    )
    await init_store()
    yield
    # Shutdown
    logger.info("Shutting down Roadmap Tracker")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Personal learning roadmap and progress tracker",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Error envelopes
# ============================================================================


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    else:
        logger.info("Request rejected", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=fail(exc.message))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=fail(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body and query validation failures as plain 400s."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=fail("; ".join(messages) or "Invalid request"),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=fail(str(exc) or "Internal server error"),
    )


# Include routers
app.include_router(roadmap.router, prefix="/api")
app.include_router(progress.router, prefix="/api")
app.include_router(notes.router, prefix="/api")
app.include_router(resources.router, prefix="/api")
app.include_router(projects.router, prefix="/api")
app.include_router(user_settings.router, prefix="/api")
app.include_router(uploads.router, prefix="/api")
app.include_router(backup.router, prefix="/api")

# Uploaded attachments
app.mount(
    settings.UPLOADS_URL,
    StaticFiles(directory=settings.UPLOADS_DIR, check_dir=False),
    name="uploads",
)


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe; also reports where documents are kept."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "env": settings.ENV,
        "data_dir": str(settings.DATA_DIR),
    }


@app.get("/")
async def root() -> dict:
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "api": "/api",
        "docs": "/docs" if settings.is_development else None,
    }
