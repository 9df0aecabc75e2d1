# api/core/middleware.py
import logging
import os
import time
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import AppSettings

logger = logging.getLogger("api.middleware")


async def log_requests_middleware(request: Request, call_next: Callable) -> Response:
    """
    Log each HTTP request with a request ID and its processing time.

    WebSocket traffic does not pass through here; the posture socket logs
    its own connection lifecycle.
    """
    request_id = request.headers.get("X-Request-ID") or os.urandom(8).hex()
    start_time = time.perf_counter()

    response = await call_next(request)

    process_time = (time.perf_counter() - start_time) * 1000
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time-ms"] = f"{process_time:.2f}"

    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({process_time:.1f} ms)",
        extra={"request_id": request_id, "status_code": response.status_code},
    )
    return response


def setup_middleware(app: FastAPI, settings: AppSettings) -> None:
    """
    Configures and adds all middleware to the FastAPI application.

    Args:
        app: The FastAPI application instance.
        settings: The application settings object.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests_middleware)
