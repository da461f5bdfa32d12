"""Configuration management for GlobalSync."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.timerange import TimeRange, is_offset_label, migrate_timezone

logger = logging.getLogger(__name__)

GLOBALSYNC_HOME = Path(os.environ.get("GLOBALSYNC_HOME", Path.home() / "globalsync"))
CONFIG_FILE = GLOBALSYNC_HOME / "config" / "globalsync.conf"
DATA_DIR = GLOBALSYNC_HOME / "data"


@dataclass
class Config:
    """GlobalSync configuration."""

    data_file: str = ""
    storage_key: str = "globalsync-data"
    default_timezone: str = "UTC+0"
    default_work_hours: str = "9-17"
    default_sleep_hours: str = "23-7"
    top_windows: int = 3
    calendar_title: str = "Team Collaboration"
    tick_seconds: int = 1

    @property
    def data_path(self) -> Path:
        """Resolved path of the JSON store file."""
        if self.data_file:
            return Path(self.data_file).expanduser()
        return DATA_DIR / "store.json"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _positive_int(key: str, value: str, fallback: int) -> int:
    try:
        number = int(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value: {value!r}")
        return fallback
    if number < 1:
        logger.warning(f"{key.upper()} must be at least 1, got {number}")
        return fallback
    return number


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from globalsync.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_file":
                config.data_file = value
            case "storage_key":
                config.storage_key = value or config.storage_key
            case "default_timezone":
                if is_offset_label(value):
                    config.default_timezone = migrate_timezone(value)
                else:
                    logger.warning(f"Invalid DEFAULT_TIMEZONE {value!r}, keeping {config.default_timezone}")
            case "default_work_hours" | "default_sleep_hours":
                # Empty is allowed and means "no range"
                parsed = TimeRange.parse(value)
                if parsed is not None and not parsed.valid:
                    logger.warning(f"{key.upper()} {value!r} does not parse as an hour range")
                setattr(config, key, value)
            case "top_windows":
                config.top_windows = _positive_int(key, value, config.top_windows)
            case "calendar_title":
                config.calendar_title = value
            case "tick_seconds":
                config.tick_seconds = _positive_int(key, value, config.tick_seconds)
            case _:
                logger.debug(f"Ignoring unknown config key {key!r}")

    return config
