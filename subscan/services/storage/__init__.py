"""
Storage Services Package

Provides the abstract key-value interface and concrete implementations.
Local files are the default backend; in-memory storage backs the tests.
"""

from subscan.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageUnavailableError,
)
from subscan.services.storage.local_file import LocalFileStorage
from subscan.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryStorage",
    "LocalFileStorage",
]
