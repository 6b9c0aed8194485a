"""Error mapping for the Web API.

Every failure leaves the API as ``{"error": "<message>"}``:

- InvalidInputError -> 400
- request body that cannot be parsed -> 400
- NotFoundError -> 404
- body over the size limit -> 413
- StoreError -> 500 with the operation's generic message
- anything else -> 500 "Internal server error"
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tonetrainer.core.errors import InvalidInputError, NotFoundError
from tonetrainer.db.json_store import StoreError

logger = structlog.get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error body with a single human-readable message."""
    return JSONResponse(status_code=status_code, content={"error": message})


@contextmanager
def store_failure(message: str) -> Iterator[None]:
    """Turn storage failures inside the block into a generic 500.

    Example:
        with store_failure("Failed to retrieve lessons"):
            return service.list_lessons()
    """
    try:
        yield
    except StoreError as e:
        logger.error("store_operation_failed", message=message, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        ) from e


async def _invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc) or "Invalid input")


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc) or "Not found")


async def _validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, errors=len(exc.errors()))
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on ``app``."""
    app.add_exception_handler(InvalidInputError, _invalid_input_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(RequestValidationError, _validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_handler)


def add_body_size_limit(app: FastAPI, max_body_bytes: int) -> None:
    """Reject requests whose declared Content-Length exceeds the limit."""

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length is not None and length.isdigit() and int(length) > max_body_bytes:
            logger.warning(
                "request_body_too_large",
                path=request.url.path,
                content_length=int(length),
                limit=max_body_bytes,
            )
            return error_response(413, "Request body too large")
        return await call_next(request)
