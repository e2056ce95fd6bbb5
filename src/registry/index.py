"""In-memory catalog of the packages stored in a bucket.

An :class:`Index` is built once per command from a full bucket listing and
is read-only afterwards; nothing is cached between invocations.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from packaging.version import InvalidVersion, Version

from common.logging_utils import Timer, extra_context, is_debug_enabled
from errors import (
    InvalidFormatError,
    NonNumericSegmentError,
    PackageNotFoundError,
    VersionResolutionFailedError,
)
from storage.base import StorageDriver
from storage.object_ref import ObjectRef
from versioning.models import PackageIdentity, VersionSpecifier
from versioning.parser import parse_filename
from versioning.patterns import LEGACY_OBJECT_KEY_RE, OBJECT_KEY_RE
from versioning.semantic import SemanticVersion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexEntry:
    """One stored artifact: package name, raw version text and its object."""

    name: str
    version: str
    object: ObjectRef

    def as_package(self) -> PackageIdentity:
        return PackageIdentity(self.name, VersionSpecifier.literal(self.version))


def entry_from_object(ref: ObjectRef, strict: bool = False) -> Optional[IndexEntry]:
    """Map an object key to an IndexEntry, or None for unrelated objects.

    The default grammar accepts ``<name>/<name>-<version>.<ext>`` keys using
    the full artifact filename grammar. ``strict`` applies the legacy pattern
    that only knows three-segment numeric ``.tar.gz`` versions.
    """
    if strict:
        match = LEGACY_OBJECT_KEY_RE.search(ref.key)
        if match is None:
            return None
        return IndexEntry(match.group(1), match.group(2), ref)

    match = OBJECT_KEY_RE.match(ref.key)
    if match is None:
        return None
    try:
        package = parse_filename(match.group("filename"))
    except InvalidFormatError:
        return None
    if package.name.lower() != match.group("prefix").lower():
        return None
    return IndexEntry(package.name, str(package.version), ref)


def _catalog_sort_key(raw: str) -> tuple:
    """PEP 440 order for display; unparseable versions sort last by text."""
    try:
        return (0, Version(raw), raw)
    except InvalidVersion:
        return (1, raw)


class Index:
    """Two-level mapping: package name -> raw version -> IndexEntry.

    Two comparisons coexist on purpose:

    * :meth:`contains` matches literal versions by their raw text, so
      ``1.0`` is not contained in an index that only holds ``1.0.0``.
    * :meth:`find` and :meth:`find_latest` compare parsed
      :class:`SemanticVersion` triples, so ``find("foo", "1.0")`` does match
      a stored ``1.0.0``.

    Entries whose version does not parse as a SemanticVersion are visible to
    :meth:`contains` but never selected by :meth:`find` or
    :meth:`find_latest`. When several entries parse to the same triple, the
    one with the lexicographically smallest raw version wins.

    Names are keyed exactly as written in the filename. Key directories match
    case-insensitively, so ``Foo/Foo-1.0.0.tar.gz`` and ``foo/foo-1.0.0.tar.gz``
    end up as two separate packages, ``Foo`` and ``foo``.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Dict[str, IndexEntry]] = {}

    @classmethod
    def from_storage_bucket(
        cls, driver: StorageDriver, bucket: str, strict: bool = False
    ) -> "Index":
        """List ``bucket`` and index every key that looks like a package.

        Non-matching keys are skipped silently.

        Raises:
            StorageError: If the listing fails.
        """
        index = cls()
        skipped = 0
        with Timer() as t:
            for ref in driver.list(bucket):
                entry = entry_from_object(ref, strict=strict)
                if entry is None:
                    skipped += 1
                    continue
                index.add(entry)
        if is_debug_enabled(logger):
            logger.debug(
                "Built package index",
                extra=extra_context(
                    event="index_build",
                    component="index",
                    bucket=bucket,
                    count=len(index),
                    skipped=skipped,
                    duration_ms=t.duration_ms(),
                ),
            )
        return index

    def add(self, entry: IndexEntry) -> None:
        """Insert or replace the entry for ``(entry.name, entry.version)``."""
        self._entries.setdefault(entry.name, {})[entry.version] = entry

    def contains(self, package: PackageIdentity) -> bool:
        items = self._entries.get(package.name)
        if not items:
            return False
        if package.version.is_latest:
            return True
        return str(package.version) in items

    def get(self, name: str, version: str) -> Optional[IndexEntry]:
        """Entry stored under exactly this raw version string."""
        return self._entries.get(name, {}).get(version)

    def find_latest(self, name: str) -> Optional[IndexEntry]:
        return self._select(self._available_versions(name))

    def find(self, name: str, version: str) -> Optional[IndexEntry]:
        try:
            wanted = SemanticVersion.parse(version)
        except (InvalidFormatError, NonNumericSegmentError):
            return None
        return self._select(
            [(parsed, entry) for parsed, entry in self._available_versions(name) if parsed == wanted]
        )

    def resolve(self, package: PackageIdentity) -> IndexEntry:
        """Resolve a request to exactly one entry.

        ``latest`` picks :meth:`find_latest`. A literal prefers the entry with
        the identical raw version and falls back to :meth:`find`.

        Raises:
            PackageNotFoundError: The name or the literal version is unknown.
            VersionResolutionFailedError: ``latest`` was requested but no
                stored version parses as a SemanticVersion.
        """
        if package.name not in self._entries:
            raise PackageNotFoundError(str(package))

        if package.version.is_latest:
            entry = self.find_latest(package.name)
            if entry is None:
                raise VersionResolutionFailedError(package.name)
            return entry

        raw = str(package.version)
        entry = self.get(package.name, raw) or self.find(package.name, raw)
        if entry is None:
            raise PackageNotFoundError(str(package))
        return entry

    def names(self) -> List[str]:
        return sorted(self._entries)

    def versions(self, name: str) -> List[IndexEntry]:
        """Entries for ``name`` in catalog display order."""
        items = self._entries.get(name, {})
        return [items[raw] for raw in sorted(items, key=_catalog_sort_key)]

    def __len__(self) -> int:
        return sum(len(items) for items in self._entries.values())

    def __iter__(self) -> Iterator[IndexEntry]:
        for name in self.names():
            yield from self.versions(name)

    def _available_versions(self, name: str) -> List[Tuple[SemanticVersion, IndexEntry]]:
        available = []
        for entry in self._entries.get(name, {}).values():
            try:
                available.append((SemanticVersion.parse(entry.version), entry))
            except (InvalidFormatError, NonNumericSegmentError):
                continue
        return available

    @staticmethod
    def _select(
        candidates: List[Tuple[SemanticVersion, IndexEntry]]
    ) -> Optional[IndexEntry]:
        best: Optional[Tuple[SemanticVersion, IndexEntry]] = None
        for parsed, entry in candidates:
            if (
                best is None
                or parsed > best[0]
                or (parsed == best[0] and entry.version < best[1].version)
            ):
                best = (parsed, entry)
        return best[1] if best else None
