"""Factory for creating the storage driver selected on the command line."""

from __future__ import annotations

import logging
import os
from typing import Optional

from constants import Constants, StorageDrivers
from errors import ConfigError

from .base import StorageDriver

log = logging.getLogger(__name__)


def create_storage_driver(
    driver_name: str,
    *,
    region: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    project: Optional[str] = None,
    root: Optional[str] = None,
) -> StorageDriver:
    """Create the StorageDriver for ``driver_name`` ("s3", "gs" or "file").

    Backend imports are deferred so that only the selected SDK must be
    importable. Options not given explicitly fall back to environment
    variables (``AWS_REGION``, ``AWS_ENDPOINT_URL``, ``GOOGLE_CLOUD_PROJECT``,
    ``GOOGLE_APPLICATION_CREDENTIALS``, ``SLING_STORAGE_ROOT``).

    Raises:
        ConfigError: If the driver name is not supported.
    """
    backend = (driver_name or "").lower()
    log.debug("Creating storage driver: %s", backend)

    if backend == StorageDrivers.S3.value:
        from .s3 import S3StorageDriver  # pylint: disable=import-outside-toplevel

        return S3StorageDriver(
            region=region or os.getenv("AWS_REGION", Constants.DEFAULT_AWS_REGION),
            endpoint_url=endpoint_url or os.getenv("AWS_ENDPOINT_URL"),
        )
    if backend == StorageDrivers.GS.value:
        from .gs import GoogleStorageDriver  # pylint: disable=import-outside-toplevel

        return GoogleStorageDriver(
            project=project or os.getenv("GOOGLE_CLOUD_PROJECT"),
            credentials_path=os.getenv("GOOGLE_APPLICATION_CREDENTIALS"),
        )
    if backend == StorageDrivers.FILE.value:
        from .filesystem import FilesystemStorageDriver  # pylint: disable=import-outside-toplevel

        return FilesystemStorageDriver(
            root=root or os.getenv("SLING_STORAGE_ROOT", Constants.DEFAULT_FILE_ROOT)
        )

    raise ConfigError(
        f"Unsupported storage driver: {driver_name!r}. "
        f"Supported: {', '.join(Constants.SUPPORTED_DRIVERS)}"
    )
