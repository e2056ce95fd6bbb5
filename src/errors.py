"""Exception hierarchy shared by the catalog, install and publish layers.

Storage backends raise the ``storage.exceptions`` family, which also derives
from :class:`SlingError`::

    SlingError
    ├── ParseError
    │   ├── InvalidFormatError
    │   └── NonNumericSegmentError
    ├── StorageError                 (storage.exceptions)
    ├── IndexLookupError
    │   ├── PackageNotFoundError
    │   └── VersionResolutionFailedError
    ├── PublishError
    │   ├── OverwriteDisallowedError
    │   └── InvalidPackageFileError
    ├── InstallError
    │   └── InstallerError
    └── ConfigError
"""

from __future__ import annotations

from typing import Optional


class SlingError(Exception):
    """Base error for every failure the CLI reports."""


# ── Parsing ─────────────────────────────────────────────────────────────

class ParseError(SlingError):
    """Malformed package identity, version or filename."""

    def __init__(self, message: str, value: Optional[str] = None):
        self.value = value
        super().__init__(message)


class InvalidFormatError(ParseError):
    """Text does not follow the expected grammar."""


class NonNumericSegmentError(ParseError):
    """A dotted version segment is not a non-negative integer."""


# ── Index lookups ───────────────────────────────────────────────────────

class IndexLookupError(SlingError):
    """Base error for catalog resolution failures."""

    def __init__(self, message: str, package: str = ""):
        self.package = package
        super().__init__(message)


class PackageNotFoundError(IndexLookupError):
    """No entry exists for the requested name or version."""

    def __init__(self, package: str):
        super().__init__(f"package not found: {package}", package=package)


class VersionResolutionFailedError(IndexLookupError):
    """'latest' was requested but no stored version is comparable."""

    def __init__(self, package: str):
        super().__init__(f"latest version resolution failed: {package}", package=package)


# ── Publish ─────────────────────────────────────────────────────────────

class PublishError(SlingError):
    """Base error for publish failures."""


class OverwriteDisallowedError(PublishError):
    """The package version is already published and overwrite was not requested."""

    def __init__(self, package: str):
        self.package = package
        super().__init__(f"refusing to overwrite published package: {package}")


class InvalidPackageFileError(PublishError):
    """The local artifact is missing or its filename is not a package filename."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"invalid package file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# ── Install ─────────────────────────────────────────────────────────────

class InstallError(SlingError):
    """Base error for install failures."""


class InstallerError(InstallError):
    """The external installer could not be started or exited non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        self.returncode = returncode
        super().__init__(message)


# ── Configuration ───────────────────────────────────────────────────────

class ConfigError(SlingError):
    """Configuration is missing, unreadable or invalid."""
