"""Reference to one stored artifact."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ObjectRef:
    """Identifies an object in a bucket; only storage drivers create these."""

    bucket: str
    key: str
    protocol: str

    @property
    def url(self) -> str:
        """Canonical ``protocol://bucket/key`` form for logs and display."""
        return f"{self.protocol}://{self.bucket}/{self.key}"

    @property
    def filename(self) -> str:
        """Last path segment of the key."""
        return self.key.rsplit("/", 1)[-1]

    def __str__(self) -> str:
        return self.url
