"""In-memory storage, for tests and for running without a disk."""

from typing import Optional

from subscan.services.storage.interface import KeyValueStorageInterface


class InMemoryStorage(KeyValueStorageInterface):
    """Dict-backed storage. State is lost when the process exits."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, data: bytes) -> None:
        self._data[key] = bytes(data)

    def keys(self) -> list[str]:
        return sorted(self._data)
