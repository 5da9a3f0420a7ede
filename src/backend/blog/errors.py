"""
Error types raised by the persistence layer.

Each error carries the HTTP status the surrounding web layer maps it to, so
callers can translate them without inspecting messages.
"""

from __future__ import annotations


class BlogError(Exception):
    """Base class for blog errors."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class BadRequestError(BlogError):
    status_code = 400


class UnauthorizedError(BlogError):
    status_code = 401


class ForbiddenError(BlogError):
    status_code = 403


class NotFoundError(BlogError):
    """Raised when a lookup that must succeed finds no record."""

    status_code = 404


class InternalServerError(BlogError):
    status_code = 500


class TransactionRolledBackError(InternalServerError):
    """Raised when the outermost transaction refuses to commit because a
    nested operation failed inside it."""
