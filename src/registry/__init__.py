"""Package catalog and the install/publish workflows built on it."""

from .index import Index, IndexEntry

__all__ = ["Index", "IndexEntry"]
