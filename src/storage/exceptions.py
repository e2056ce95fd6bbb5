"""Common exception hierarchy for object storage backends."""

from __future__ import annotations

from typing import Optional

from errors import SlingError


class StorageError(SlingError):
    """Base exception for all storage operations.

    The backend exception is preserved as ``cause`` (and chained with
    ``raise ... from``) so callers can inspect the transport failure.
    """

    def __init__(
        self,
        message: str,
        bucket: Optional[str] = None,
        key: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        self.bucket = bucket
        self.key = key
        self.cause = cause
        super().__init__(message)

    @property
    def location(self) -> str:
        """Human readable ``bucket/key`` the failure refers to."""
        if self.bucket and self.key:
            return f"{self.bucket}/{self.key}"
        return self.bucket or self.key or ""


class StorageNotFoundError(StorageError):
    """Raised when a requested bucket or key does not exist."""


class StoragePermissionError(StorageError):
    """Raised when credentials are invalid or access is denied."""


class StorageConnectionError(StorageError):
    """Raised when the storage backend is unreachable."""
