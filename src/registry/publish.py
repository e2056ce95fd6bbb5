"""Publish workflow: upload a local artifact unless that version already exists."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from cli_config import RuntimeConfig
from errors import ConfigError, InvalidFormatError, InvalidPackageFileError, OverwriteDisallowedError
from storage.base import StorageDriver
from storage.object_ref import ObjectRef
from versioning.models import PackageIdentity
from versioning.parser import parse_filename

from .index import Index

logger = logging.getLogger(__name__)


def identify_package_file(path: Union[str, os.PathLike]) -> PackageIdentity:
    """Check the artifact exists and parse its filename.

    Raises:
        InvalidPackageFileError: Missing file or unrecognized filename.
    """
    path = Path(path)
    if not path.is_file():
        raise InvalidPackageFileError(str(path), "file not found")
    try:
        return parse_filename(path.name)
    except InvalidFormatError as e:
        raise InvalidPackageFileError(str(path), str(e)) from e


def publish(
    config: RuntimeConfig,
    driver: StorageDriver,
    path: Union[str, os.PathLike],
    overwrite: bool = False,
) -> ObjectRef:
    """Upload ``path`` to ``<name>/<filename>`` in the configured bucket.

    The filename is validated before any storage call, and the upload is
    skipped entirely when the version exists and ``overwrite`` is False.
    The existence check always reads the bucket with the full artifact
    grammar; legacy key matching only narrows install and list.

    Returns:
        The reference of the uploaded object.

    Raises:
        ConfigError: No bucket configured.
        InvalidPackageFileError: The artifact is missing or misnamed.
        OverwriteDisallowedError: The version is already published.
        StorageError: Listing or uploading failed.
    """
    if not config.bucket:
        raise ConfigError("no bucket was provided")
    path = Path(path)
    package = identify_package_file(path)

    index = Index.from_storage_bucket(driver, config.bucket)
    if index.contains(package):
        if not overwrite:
            raise OverwriteDisallowedError(str(package))
        logger.warning("Overwriting published package %s", package)

    ref = driver.get_object_ref(config.bucket, package.object_key(path.name))
    logger.info("Uploading package: %s -> %s", path, ref.url)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InvalidPackageFileError(str(path), str(e)) from e
    driver.put(ref.bucket, ref.key, data)
    return ref
