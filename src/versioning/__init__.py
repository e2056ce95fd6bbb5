"""Package identities, version grammars and the numeric version comparator."""

from .models import PackageIdentity, Specifier, VersionKind, VersionSpecifier
from .parser import parse_filename, parse_request, parse_specifier, read_packages_from_file
from .semantic import SemanticVersion

__all__ = [
    "PackageIdentity",
    "SemanticVersion",
    "Specifier",
    "VersionKind",
    "VersionSpecifier",
    "parse_filename",
    "parse_request",
    "parse_specifier",
    "read_packages_from_file",
]
