"""Key-value storage interface for the persisted snapshot."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Interface for a string key-value store (browser-localStorage style)."""

    def get_item(self, key: str) -> str | None:
        """Read the value stored under a key. Returns None if not found."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Write/overwrite the value stored under a key."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete a key if present."""
        ...
