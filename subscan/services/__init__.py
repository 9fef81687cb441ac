"""Services package."""

from subscan.services.storage import (
    InMemoryStorage,
    KeyValueStorageInterface,
    LocalFileStorage,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    # Storage services
    "InMemoryStorage",
    "KeyValueStorageInterface",
    "LocalFileStorage",
    "StorageError",
    "StorageUnavailableError",
]
