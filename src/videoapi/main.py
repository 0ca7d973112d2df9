"""
Videos API - Main FastAPI application.

Entry point for the Videos API server.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Any

from fastapi import Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from videoapi import __version__
from videoapi.config import get_settings
from videoapi.core import (
    APIErrorResult,
    VideoNotFoundError,
    VideoValidationError,
)
from videoapi.storage import VideosStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - a fresh, empty store per app."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app.state.videos_store = VideosStore(
        publication_delay=timedelta(hours=settings.publication_delay_hours),
    )
    logger.info(f"{settings.app_name} {__version__} started")

    yield

    logger.info(f"{settings.app_name} stopped")


def get_store(request: Request) -> VideosStore:
    """Dependency returning the app's videos store."""
    return request.app.state.videos_store


def parse_video_id(video_id: str) -> int | str:
    """Path ids that are not integers are passed through and never match."""
    try:
        return int(video_id)
    except ValueError:
        return video_id


# =============================================================================
# Error Handlers
# =============================================================================


async def validation_error_handler(request: Request, exc: VideoValidationError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors}")
    return JSONResponse(
        status_code=400,
        content=APIErrorResult.for_field("validation", exc.errors).model_dump(),
    )


async def not_found_handler(request: Request, exc: VideoNotFoundError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: video {exc.video_id} not found")
    return JSONResponse(
        status_code=404,
        content=APIErrorResult.for_field("id", ["Video not found"]).model_dump(),
    )


async def request_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get the same envelope as field errors."""
    messages = [error.get("msg", "Invalid request body") for error in exc.errors()]
    logger.warning(f"Malformed request {request.method} {request.url.path}: {messages}")
    return JSONResponse(
        status_code=400,
        content=APIErrorResult.for_field("body", messages).model_dump(),
    )


# =============================================================================
# Application
# =============================================================================


def create_app() -> FastAPI:
    """Build the FastAPI application with its routes and error handlers."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="In-memory video metadata service",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(VideoValidationError, validation_error_handler)
    app.add_exception_handler(VideoNotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_error_handler)

    # -------------------------------------------------------------------------
    # Health & Status
    # -------------------------------------------------------------------------

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Basic health check."""
        return {"status": "healthy", "version": __version__}

    @app.get("/api/status")
    async def status(store: VideosStore = Depends(get_store)) -> dict[str, Any]:
        """Service status including the number of stored videos."""
        return {"version": __version__, "videos_count": store.count()}

    # -------------------------------------------------------------------------
    # Videos
    # -------------------------------------------------------------------------

    @app.get("/videos")
    async def list_videos(store: VideosStore = Depends(get_store)) -> list[dict[str, Any]]:
        """List all videos in creation order."""
        return store.list()

    @app.get("/videos/{video_id}")
    async def get_video(video_id: str, store: VideosStore = Depends(get_store)) -> dict[str, Any]:
        """Get a specific video by ID."""
        return store.get(parse_video_id(video_id))

    @app.post("/videos", status_code=201)
    async def create_video(
        payload: Any = Body(default=None),
        store: VideosStore = Depends(get_store),
    ) -> dict[str, Any]:
        """Create a video. Returns the stored record."""
        return store.create(payload if payload is not None else {})

    @app.put("/videos/{video_id}", status_code=204)
    async def update_video(
        video_id: str,
        payload: Any = Body(default=None),
        store: VideosStore = Depends(get_store),
    ) -> Response:
        """
        Update a video.

        The payload is validated before the id is looked up, so an invalid
        payload gets a 400 even for an unknown id.
        """
        store.update(parse_video_id(video_id), payload if payload is not None else {})
        return Response(status_code=204)

    @app.delete("/videos/{video_id}", status_code=204)
    async def delete_video(video_id: str, store: VideosStore = Depends(get_store)) -> Response:
        """Delete a video by ID."""
        store.delete(parse_video_id(video_id))
        return Response(status_code=204)

    return app


app = create_app()
