# api/main.py
"""FastAPI application entrypoint.

This file uses the application factory pattern to create and configure
the FastAPI application. Run with:

    uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import settings
from api.core.logging import setup_logging
from api.core.middleware import setup_middleware
from api.core.exception_handlers import setup_exception_handlers
from api.routers import router
from api.websockets import handle_posture_stream

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup complete.")
    yield
    logger.info("Application shutting down.")


def create_app() -> FastAPI:
    """
    Creates, configures, and returns a FastAPI application instance.

    This factory encapsulates the application's setup logic, making it
    reusable for testing and other deployment scenarios.

    Returns:
        The configured FastAPI application instance.
    """
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)

    setup_exception_handlers(app)

    app.include_router(router)
    app.add_api_websocket_route("/ws/v1/posture", handle_posture_stream)

    logger.info(
        "DEFAULTS -> SENSITIVITY=%s PRIVACY=%s PUBLISH_INTERVAL=%ss",
        settings.DEFAULT_SENSITIVITY, settings.DEFAULT_PRIVACY_MODE, settings.PUBLISH_INTERVAL_SEC,
    )

    return app


# Create the application instance for the Uvicorn server
app = create_app()
