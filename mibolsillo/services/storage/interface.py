"""
Abstract Storage Interface

We define an abstract key-value interface for persistence, modelled on
the browser's localStorage: string keys, string values, whole-record
reads and writes. This allows us to:
1. Keep the store decoupled from where the bytes end up
2. Use in-memory storage for testing
3. Swap the JSON file for something else later

The interface is intentionally tiny. The store serializes its whole state
into one value and writes it under one key.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for key-value persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Record key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Record key
            value: Serialized value

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data could not be read."""
    pass


class StorageWriteError(StorageError):
    """Data could not be written."""
    pass
