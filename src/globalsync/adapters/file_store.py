"""JSON-file key-value store adapter."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    File-based key-value store.

    Implements KeyValueStore protocol. All keys live in one JSON object that
    is rewritten in full on every write.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, str]:
        """Read every stored item. Raises on unreadable or corrupt files."""
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data

    def _read_for_write(self) -> dict[str, str]:
        """Like _read_all, but a corrupt file counts as empty so it can be replaced."""
        try:
            return self._read_all()
        except ValueError as e:
            logger.warning(f"Overwriting corrupt store file {self.path}: {e}")
            return {}

    def _write_all(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, indent=2))

    def get_item(self, key: str) -> str | None:
        """Read the value stored under a key. Returns None if not found."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Write/overwrite the value stored under a key."""
        items = self._read_for_write()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        """Delete a key if present."""
        items = self._read_for_write()
        if key in items:
            del items[key]
            self._write_all(items)
