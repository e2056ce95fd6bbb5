"""
Filesystem storage driver: each bucket is a directory under a local root.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from constants import Constants

from .base import StorageDriver
from .exceptions import StorageError, StorageNotFoundError
from .object_ref import ObjectRef


class FilesystemStorageDriver(StorageDriver):
    """Store packages on local disk, mirroring the bucket key layout."""

    protocol = "file"

    def __init__(self, root: Union[str, Path] = Constants.DEFAULT_FILE_ROOT):
        self.root = Path(root)

    def _bucket_dir(self, bucket: str) -> Path:
        return self.root / bucket

    def _path(self, bucket: str, key: str) -> Path:
        base = self._bucket_dir(bucket).resolve()
        path = (base / key).resolve()
        if base != path and base not in path.parents:
            raise StorageError(f"key escapes bucket: {key}", bucket=bucket, key=key)
        return path

    def list(self, bucket: str) -> List[ObjectRef]:
        bucket_dir = self._bucket_dir(bucket)
        if not bucket_dir.is_dir():
            raise StorageNotFoundError(f"bucket not found: {bucket_dir}", bucket=bucket)
        return [
            self.get_object_ref(bucket, path.relative_to(bucket_dir).as_posix())
            for path in sorted(bucket_dir.rglob("*"))
            if path.is_file()
        ]

    def get(self, bucket: str, key: str) -> bytes:
        path = self._path(bucket, key)
        if not path.is_file():
            raise StorageNotFoundError(f"object not found: {bucket}/{key}", bucket=bucket, key=key)
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"{bucket}/{key}: {e}", bucket=bucket, key=key, cause=e) from e

    def put(self, bucket: str, key: str, data: bytes) -> None:
        path = self._path(bucket, key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"{bucket}/{key}: {e}", bucket=bucket, key=key, cause=e) from e
