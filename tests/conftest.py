"""
Shared fixtures.

No test touches the user's real data directory: file-backed tests use
pytest's tmp_path, everything else runs on in-memory storage.
"""

import pytest

from subscan.config import get_settings
from subscan.services.storage import InMemoryStorage, LocalFileStorage, StorageUnavailableError
from subscan.store import SubscriptionStore


class FlakyStorage(InMemoryStorage):
    """In-memory storage that can be told to fail, and counts writes."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def get(self, key):
        if self.fail_reads:
            raise StorageUnavailableError("storage offline")
        return super().get(key)

    def set(self, key, data):
        if self.fail_writes:
            raise StorageUnavailableError("disk full")
        self.writes += 1
        super().set(key, data)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Point settings at a temp dir and drop any cached settings."""
    monkeypatch.setenv("SUBSCAN_STORAGE_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def memory_storage():
    return FlakyStorage()


@pytest.fixture
def file_storage(tmp_path):
    return LocalFileStorage(tmp_path / "state", attempts=3, retry_wait_seconds=0)


@pytest.fixture
def store(memory_storage):
    """A loaded store over empty in-memory storage."""
    store = SubscriptionStore(memory_storage)
    store.load()
    return store
