"""
Application exceptions. Each carries the HTTP status the API renders it
with; the body is always ``{"detail": str(exc)}``.
"""

from __future__ import annotations


class AppError(Exception):
    """Base exception for failures surfaced to API clients."""

    status_code = 500


class ValidationError(AppError):
    """Raised when request input is missing or malformed."""

    status_code = 400


class NotFoundError(AppError):
    """Raised when a lookup by id yields no record."""

    status_code = 404


class StorageError(AppError):
    """Raised when a backing file or its directory cannot be read or written."""

    status_code = 500


class ContentWorkflowError(AppError):
    """Raised when the external content-generation workflow cannot be reached."""

    status_code = 502


class ContentWorkflowNotConfigured(ContentWorkflowError):
    status_code = 503
