"""Object storage drivers for the package bucket."""

from .base import StorageDriver
from .exceptions import (
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)
from .factory import create_storage_driver
from .object_ref import ObjectRef

__all__ = [
    "ObjectRef",
    "StorageDriver",
    "StorageError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "StorageConnectionError",
    "create_storage_driver",
]
