# api/core/exception_handlers.py
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from posture.exceptions import PostureTrackingError

logger = logging.getLogger("api.errors")


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    """Body shared by every error response: ``{"error": ..., "detail": ...}``."""
    return JSONResponse(status_code=status_code, content={"error": error, "detail": detail})


async def posture_error_handler(request: Request, exc: PostureTrackingError) -> JSONResponse:
    """Domain errors (bad sensitivity, unknown mode, ...) map to 422."""
    logger.warning(
        f"Rejected request {request.method} {request.url.path}: {exc.message}",
        extra={"path": str(request.url.path), "method": request.method},
    )
    return _error_response(422, type(exc).__name__, exc.message)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Anything that escapes a route becomes a 500.

    The traceback is logged; the client only learns which route failed.
    """
    logger.error(
        f"{type(exc).__name__} while serving {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "request_id": request.headers.get("X-Request-ID"),
        },
    )
    return _error_response(
        500,
        "InternalServerError",
        f"Unexpected error while serving {request.method} {request.url.path}",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Adds custom exception handlers to the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(PostureTrackingError, posture_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
