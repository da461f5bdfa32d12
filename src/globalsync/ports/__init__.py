"""Ports - interfaces/protocols for external dependencies."""

from .snapshot_store import KeyValueStore

__all__ = [
    "KeyValueStore",
]
