"""Data models for package identities and version requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from constants import Constants


class VersionKind(Enum):
    """Whether a request names a concrete version or asks for the newest one."""
    LATEST = "latest"
    LITERAL = "literal"


@dataclass(frozen=True)
class Specifier:
    """Structured view of a version that follows the extended grammar.

    Kept on the literal next to its raw text. Resolution never reads it; it
    compares raw strings or :class:`versioning.semantic.SemanticVersion`
    triples.
    """
    release: str
    op: str = "=="
    epoch: int = 0
    pre: Optional[Tuple[str, int]] = None
    post: Optional[int] = None
    dev: Optional[int] = None
    local: Optional[str] = None

    @property
    def is_prerelease(self) -> bool:
        return self.pre is not None or self.dev is not None

    def public(self) -> str:
        """Normalized version text without the operator."""
        parts = []
        if self.epoch:
            parts.append(f"{self.epoch}!")
        parts.append(self.release)
        if self.pre is not None:
            parts.append(f"{self.pre[0]}{self.pre[1]}")
        if self.post is not None:
            parts.append(f".post{self.post}")
        if self.dev is not None:
            parts.append(f".dev{self.dev}")
        if self.local:
            parts.append(f"+{self.local}")
        return "".join(parts)


@dataclass(frozen=True)
class VersionSpecifier:
    """Either the ``latest`` sentinel or a literal version string.

    Literals compare by their raw text; ``specifier`` is the parsed form when
    the text follows the extended grammar and is ignored for equality.
    """
    kind: VersionKind
    raw: Optional[str] = None
    specifier: Optional[Specifier] = field(default=None, compare=False)

    @classmethod
    def latest(cls) -> "VersionSpecifier":
        return cls(VersionKind.LATEST)

    @classmethod
    def literal(cls, raw: str, specifier: Optional[Specifier] = None) -> "VersionSpecifier":
        return cls(VersionKind.LITERAL, raw, specifier)

    @property
    def is_latest(self) -> bool:
        return self.kind is VersionKind.LATEST

    def __str__(self) -> str:
        return Constants.LATEST_KEYWORD if self.is_latest else str(self.raw)


@dataclass(frozen=True)
class PackageIdentity:
    """A package name plus the version being requested or published."""
    name: str
    version: VersionSpecifier = field(default_factory=VersionSpecifier.latest)

    def object_key(self, filename: str) -> str:
        """Bucket key for an artifact of this package: ``<name>/<filename>``."""
        return f"{self.name}/{filename}"

    def __str__(self) -> str:
        if self.version.is_latest:
            return self.name
        return f"{self.name}@{self.version}"
