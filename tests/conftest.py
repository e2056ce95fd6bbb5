"""Shared fixtures: an in-memory storage driver that records calls."""

from typing import Dict, List, Tuple

import pytest

from storage.base import StorageDriver
from storage.exceptions import StorageNotFoundError


class MemoryStorageDriver(StorageDriver):
    """Dict-backed driver; counts calls so tests can assert on side effects."""

    protocol = "mem"

    def __init__(self, objects: Dict[Tuple[str, str], bytes] = None):
        self.objects = dict(objects or {})
        self.list_calls = 0
        self.get_calls: List[Tuple[str, str]] = []
        self.put_calls: List[Tuple[str, str]] = []

    def list(self, bucket):
        self.list_calls += 1
        return [
            self.get_object_ref(b, key)
            for (b, key) in sorted(self.objects)
            if b == bucket
        ]

    def get(self, bucket, key):
        self.get_calls.append((bucket, key))
        try:
            return self.objects[(bucket, key)]
        except KeyError:
            raise StorageNotFoundError(f"missing {bucket}/{key}", bucket=bucket, key=key) from None

    def put(self, bucket, key, data):
        self.put_calls.append((bucket, key))
        self.objects[(bucket, key)] = data


SCENARIO_KEYS = [
    "foo/foo-1.0.0.tar.gz",
    "foo/foo-1.2.0.tar.gz",
    "bar/bar-0.1.0.tar.gz",
    "junk/readme.txt",
]


@pytest.fixture
def memory_driver():
    """Empty in-memory driver."""
    return MemoryStorageDriver()


@pytest.fixture
def scenario_driver():
    """Driver whose "pkgs" bucket holds the foo/bar scenario listing."""
    return MemoryStorageDriver({("pkgs", key): key.encode() for key in SCENARIO_KEYS})
