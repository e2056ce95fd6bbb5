"""
Base storage driver: the capability every object-storage backend provides.
"""

from __future__ import annotations

import abc
from typing import List

from .object_ref import ObjectRef


class StorageDriver(abc.ABC):
    """Abstract base for bucket backends.

    Implementations hold their own client and credentials; nothing is shared
    between drivers. Every failure surfaces as a
    :class:`storage.exceptions.StorageError`.
    """

    #: Short tag stamped on ObjectRefs ("s3", "gs", ...). Display only.
    protocol: str = ""

    @abc.abstractmethod
    def list(self, bucket: str) -> List[ObjectRef]:
        """Enumerate every object in ``bucket``; empty list for an empty bucket."""

    @abc.abstractmethod
    def get(self, bucket: str, key: str) -> bytes:
        """Fetch the full content of ``key``."""

    @abc.abstractmethod
    def put(self, bucket: str, key: str, data: bytes) -> None:
        """Store ``data`` at ``key``, overwriting any existing object."""

    def get_object_ref(self, bucket: str, key: str) -> ObjectRef:
        return ObjectRef(bucket=bucket, key=key, protocol=self.protocol)
