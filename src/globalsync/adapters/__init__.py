"""Adapters - I/O implementations of ports."""

from .file_store import JsonFileStore
from .memory_store import MemoryStore

__all__ = [
    "JsonFileStore",
    "MemoryStore",
]
