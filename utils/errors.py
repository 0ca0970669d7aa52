"""
Client-facing error taxonomy.

Every failure that reaches a client is one of these.  The exception
handlers in ``api.errors`` turn them into JSON responses; nothing else
about the exception (type name, traceback) is ever sent back.
"""

from __future__ import annotations

from typing import Optional


class ApiError(Exception):
    """Base class: an HTTP status plus a human-readable message."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.status_code}, {self.message!r})"


class InvalidInput(ApiError):
    """Malformed, missing or out-of-range parameters."""

    status_code = 400


class Unauthorized(ApiError):
    """Missing credentials (401) or invalid/expired token (403)."""

    status_code = 401


class Conflict(ApiError):
    status_code = 409


class NotFound(ApiError):
    status_code = 404


class UpstreamFailure(ApiError):
    """The news provider answered with an error status."""

    status_code = 502


class ConfigurationFailure(ApiError):
    """A required secret is missing; raised before any network call."""

    status_code = 500


class InternalFailure(ApiError):
    status_code = 500
