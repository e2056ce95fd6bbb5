"""Install workflow: resolve every request, download, then run the installer."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from cli_config import RuntimeConfig
from common.logging_utils import Timer, extra_context
from constants import Constants
from errors import ConfigError
from storage.base import StorageDriver
from versioning.models import PackageIdentity

from .index import Index, IndexEntry
from .pip import install_package

logger = logging.getLogger(__name__)

Installer = Callable[[str, str, Path], None]


def resolve_all(index: Index, packages: Iterable[PackageIdentity]) -> List[IndexEntry]:
    """Resolve every request up front; the first failure aborts the batch.

    Raises:
        PackageNotFoundError: A name or literal version is not in the index.
        VersionResolutionFailedError: ``latest`` has no comparable version.
    """
    resolved = []
    for package in packages:
        entry = index.resolve(package)
        if package.version.is_latest:
            logger.info(
                "Resolved package version: %s@latest -> %s@%s",
                package.name, entry.name, entry.version,
            )
        resolved.append(entry)
    return resolved


def download_package(driver: StorageDriver, entry: IndexEntry, directory: Path) -> Path:
    """Fetch ``entry`` into ``directory`` under its original filename."""
    logger.info("Downloading %s", entry.object.url)
    with Timer() as t:
        data = driver.get(entry.object.bucket, entry.object.key)
    target = directory / entry.object.filename
    target.write_bytes(data)
    logger.debug(
        "Downloaded artifact",
        extra=extra_context(
            event="download",
            component="install",
            package=f"{entry.name}@{entry.version}",
            target=str(target),
            duration_ms=t.duration_ms(),
        ),
    )
    return target


def install(
    config: RuntimeConfig,
    driver: StorageDriver,
    packages: List[PackageIdentity],
    *,
    strict: bool = False,
    installer: Optional[Installer] = None,
) -> List[IndexEntry]:
    """Install ``packages`` from the configured bucket.

    Nothing is downloaded until every request has resolved, so a bad name
    leaves the environment untouched.

    Returns:
        The entries that were installed, in request order.

    Raises:
        ConfigError: No bucket configured.
        IndexLookupError: A request could not be resolved.
        StorageError: Listing or downloading failed.
        InstallerError: The installer failed.
    """
    if not config.bucket:
        raise ConfigError("no bucket was provided")
    run_installer = installer or install_package

    index = Index.from_storage_bucket(driver, config.bucket, strict=strict)
    logger.info("Indexed %d package file(s) in %s", len(index), config.bucket)

    entries = resolve_all(index, packages)

    with tempfile.TemporaryDirectory(prefix=Constants.TEMP_DIR_PREFIX) as tmp:
        for entry in entries:
            path = download_package(driver, entry, Path(tmp))
            run_installer(config.python, config.pip_args, path)
    return entries
