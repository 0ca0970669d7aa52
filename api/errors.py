"""
Error mapping and FastAPI exception handlers.

``map_upstream_error`` turns whatever a news route caught into exactly one
``ApiError``; the handlers render every ``ApiError`` as JSON.  Auth routes
put the text under ``message``, every other route under ``error``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.errors import ApiError, InternalFailure, InvalidInput, UpstreamFailure

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR_MESSAGE = "Internal server error. Please try again."
GENERIC_PROVIDER_ERROR = "GNews API error."

_UPSTREAM_STATUS_MESSAGES = {
    401: "Invalid API key. Check your GNews API key.",
    403: "Daily request limit reached. Try again tomorrow.",
    429: "Rate limit exceeded. Please slow down.",
}


def _provider_message(response: httpx.Response) -> str:
    """Join the provider's own ``errors`` payload, if it sent one."""
    try:
        data = response.json()
    except ValueError:
        return GENERIC_PROVIDER_ERROR
    errors = data.get("errors") if isinstance(data, dict) else None
    if isinstance(errors, dict):
        errors = list(errors.values())
    if isinstance(errors, list):
        parts = [str(e) for e in errors if e]
        if parts:
            return ", ".join(parts)
    elif isinstance(errors, str) and errors:
        return errors
    return GENERIC_PROVIDER_ERROR


def map_upstream_error(exc: Exception) -> ApiError:
    """
    Map a failure from the news pipeline to a client-facing error.

    Precedence: errors already in the taxonomy (configuration, validation)
    pass through; then the three named provider statuses; then any other
    provider status mirrored with the provider's message; anything without
    an HTTP response becomes a generic 500.
    """
    if isinstance(exc, ApiError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        if code in _UPSTREAM_STATUS_MESSAGES:
            return UpstreamFailure(_UPSTREAM_STATUS_MESSAGES[code], code)
        return UpstreamFailure(_provider_message(exc.response), code)

    return InternalFailure(INTERNAL_ERROR_MESSAGE)


def _body_key(request: Request) -> str:
    auth_prefix = request.app.state.settings.auth_prefix
    path = request.url.path
    if path == auth_prefix or path.startswith(auth_prefix + "/"):
        return "message"
    return "error"


def _json_error(request: Request, status_code: int, message: str, headers: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={_body_key(request): message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %r", request.method, request.url.path, exc)
        return _json_error(request, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected body for %s: %s", request.url.path, exc.errors())
        err = InvalidInput("Invalid request body")
        return _json_error(request, err.status_code, err.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": ROUTE_NOT_FOUND},
            )
        return _json_error(request, exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _json_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
