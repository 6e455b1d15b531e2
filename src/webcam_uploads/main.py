"""Webcam capture upload and retrieval service"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from webcam_uploads.api.routes import router
from webcam_uploads.core.config import Settings
from webcam_uploads.core.constants import (
    APP_DESCRIPTION,
    APP_TITLE,
    APP_VERSION,
    UPLOAD_URL_PREFIX,
)
from webcam_uploads.core.error_handlers import register_error_handlers
from webcam_uploads.core.rate_limiter import bind_rate_limit_scope
from webcam_uploads.core.storage import ImageStorage, ensure_storage_dir

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the ASGI app; fails fast when the storage directory is unusable."""
    settings = settings or Settings.from_env()

    # Create directories
    upload_dir = ensure_storage_dir(settings.upload_dir)

    app = FastAPI(
        title=APP_TITLE,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
    )
    app.state.settings = settings
    app.state.storage = ImageStorage(upload_dir)

    # Add rate limiting to app
    bind_rate_limit_scope(app)
    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Stored images, read-only
    app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=upload_dir), name="uploads")

    # Include API routes
    app.include_router(router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    logger.info("Server starting on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
