"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep state in a local file for normal use
2. Use in-memory storage for testing
3. Swap in another local backend later
4. Keep the store decoupled from storage implementation

The interface is intentionally tiny: a key-value boundary over bytes.
The store owns serialization; backends only move bytes.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for durable key-value storage.

    Any storage implementation must implement these methods.
    Both are synchronous: when set() returns, the data is durable.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Read the value stored under a key.

        Args:
            key: Namespaced key

        Returns:
            The stored bytes, or None if nothing was ever stored

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, data: bytes) -> None:
        """
        Replace the value stored under a key.

        Either the whole value is written or nothing is.

        Args:
            key: Namespaced key
            data: Complete new value

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """The storage backend could not be reached after retrying."""
    pass
