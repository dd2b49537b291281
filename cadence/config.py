import logging
import os
from pathlib import Path

import yaml

from .lib.dates import get_zone

logger = logging.getLogger(__name__)

CADENCE_DIR = Path(os.environ.get("CADENCE_HOME", Path.home() / ".cadence")).expanduser()
CONFIG_PATH = CADENCE_DIR / "config.yaml"


class Config:
    """Single-instance config manager. Load once, cache in memory."""

    _instance: "Config | None" = None
    _data: dict[str, object]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._data = {}
            cls._instance._load()
        return cls._instance

    def _load(self) -> None:
        """Load config from disk."""
        if not CONFIG_PATH.exists():
            self._data = {}
            return
        try:
            with CONFIG_PATH.open() as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, e)
            loaded = {}
        self._data = loaded if isinstance(loaded, dict) else {}

    def _save(self) -> None:
        """Persist config to disk."""
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with CONFIG_PATH.open("w") as f:
            yaml.dump(self._data, f, default_flow_style=False, allow_unicode=True)

    def get(self, key: str, default: object = None) -> object:
        """Get config value."""
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        """Set config value and persist."""
        self._data[key] = value
        self._save()


def get_timezone() -> str | None:
    """Zone the CLI uses when no --tz is given. None = unset."""
    val = Config().get("timezone")
    return str(val).strip() if val else None


def set_timezone(zone: str) -> None:
    get_zone(zone)
    Config().set("timezone", zone.strip())
