"""Durable record storage.

Provides:
- A record store contract (load/save of named, ordered collections)
- JSON file, SQLite and in-memory backends
- A versioned codec shared by all backends
"""

from pathlib import Path

from .base import CodecError, RecordStore, StorageError
from .json_store import JsonRecordStore
from .memory_store import MemoryRecordStore
from .sqlite_store import SqliteRecordStore


def open_store(backend: str, data_dir: Path) -> RecordStore:
    """Create a record store for a backend name.

    Args:
        backend: One of "json", "sqlite" or "memory"
        data_dir: Directory for file-based backends

    Returns:
        Record store instance

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend == "json":
        return JsonRecordStore(data_dir)
    if backend == "sqlite":
        return SqliteRecordStore(data_dir)
    if backend == "memory":
        return MemoryRecordStore()
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "CodecError",
    "JsonRecordStore",
    "MemoryRecordStore",
    "RecordStore",
    "SqliteRecordStore",
    "StorageError",
    "open_store",
]
