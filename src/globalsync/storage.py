"""Snapshot persistence on top of a key-value store."""

import json
import logging

from .core.roster import AppSnapshot
from .ports import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "globalsync-data"


class StorageError(RuntimeError):
    """Raised when a change could not be written to the store."""


def default_snapshot() -> AppSnapshot:
    """Fresh snapshot: empty profile on the standard 9-5 schedule, dark theme."""
    return AppSnapshot()


def load_snapshot(store: KeyValueStore, key: str = STORAGE_KEY) -> AppSnapshot:
    """
    Load the snapshot stored under key.

    Missing fields are filled from the defaults and legacy GMT timezone
    labels are migrated. Any read or parse failure is logged and the
    default snapshot returned.
    """
    try:
        stored = store.get_item(key)
        if not stored:
            return default_snapshot()
        data = json.loads(stored)
        if not isinstance(data, dict):
            raise ValueError("stored snapshot is not a JSON object")
        return AppSnapshot.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Failed to load data from store: {e}")
        return default_snapshot()


def save_snapshot(store: KeyValueStore, snapshot: AppSnapshot, key: str = STORAGE_KEY) -> bool:
    """Overwrite the stored snapshot. Returns False (and logs) on failure."""
    try:
        store.set_item(key, json.dumps(snapshot.to_dict()))
        return True
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Failed to save data to store: {e}")
        return False
