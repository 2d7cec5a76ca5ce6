"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The JSON file backend is the default; the in-memory backend is for tests
and for running without a writable disk.
"""

from mibolsillo.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from mibolsillo.services.storage.json_file import JsonFileStorage
from mibolsillo.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
