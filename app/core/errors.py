"""Domain error kinds and their HTTP status mapping.

Every error raised past a service boundary is one of these. The application
registers a single handler for ``AppError`` that renders ``{"error": message}``
with the class's ``status_code``.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or invalid request fields."""

    status_code = 400


class NotFoundError(AppError):
    """Referenced note, flashcard or batch does not exist."""

    status_code = 404


class ConflictError(AppError):
    """Delete blocked by rows that still reference the target."""

    status_code = 409


class UpstreamError(AppError):
    """The completion API could not be reached or answered badly.

    ``kind`` is one of ``"transport"``, ``"status"`` or ``"envelope"``.
    """

    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        kind: str = "transport",
        upstream_status: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.upstream_status = upstream_status
        self.body = body


class PersistenceError(AppError):
    """Any storage failure that is not a conflict."""

    status_code = 500


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
    "PersistenceError",
]
