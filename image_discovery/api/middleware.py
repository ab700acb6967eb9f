"""API middleware — CORS, request logging, and error handling.

Application errors become JSON :class:`ErrorResponse` bodies with a
status code chosen by the error's ``code``:

    VALIDATION_ERROR     400
    CONFIGURATION_ERROR  503
    NO_SUITABLE_IMAGES   502
    CANCELLED            499 (client closed request)
    anything else        500

Bodies that fail schema validation (a null or non-string field) are
reported as VALIDATION_ERROR too, not as FastAPI's default 422.

Stack traces stay in the server log; the client sees only the code and
the message.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from image_discovery.api.schemas import ErrorResponse
from image_discovery.utils.errors import ImageDiscoveryError, InvalidRequestError
from image_discovery.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

STATUS_BY_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "CONFIGURATION_ERROR": 503,
    "NO_SUITABLE_IMAGES": 502,
    "CANCELLED": 499,
}


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware; defaults to ``["*"]`` for development."""
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


async def handle_image_discovery_error(request: Request, exc: ImageDiscoveryError) -> JSONResponse:
    """Convert an :class:`ImageDiscoveryError` into a sanitized JSON error."""
    status_code = STATUS_BY_CODE.get(exc.code, 500)
    log = _logger.warning if status_code < 500 else _logger.error
    log(
        "application_error",
        error_type=type(exc).__name__,
        code=exc.code,
        message=exc.message,
        provider=exc.provider_name,
        path=str(request.url.path),
    )
    body = ErrorResponse(error=exc.message, code=exc.code, retryable=exc.retryable)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report body-schema failures (null or wrongly typed fields) as ``VALIDATION_ERROR``."""
    fields = sorted({_field_name(error.get("loc", ())) for error in exc.errors()})
    error = InvalidRequestError(f"Invalid request fields: {', '.join(fields)}")
    return await handle_image_discovery_error(request, error)


def _field_name(loc: tuple | list) -> str:
    # loc looks like ("body", "articleTitle"); a malformed body has no field part.
    parts = [str(part) for part in loc[1:]]
    return ".".join(parts) if parts else "body"


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ImageDiscoveryError, handle_image_discovery_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
