"""
Storage Configuration

Where finished recordings go and how much disk must stay free.

Values come from settings.py and may be overridden by a YAML file
(config/storage.yaml by default). A missing file is created with the
defaults so it can be edited in place.

Example storage.yaml:
    recordings_base_path: /home/cook/recordings
    min_free_space_bytes: 536870912
    write_metadata: true
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from config.settings import (
    MIN_FREE_SPACE_BYTES,
    RECORDINGS_BASE_PATH,
    STORAGE_CONFIG_PATH,
)


def default_storage_settings() -> Dict[str, Any]:
    """Settings used when the YAML file does not override them"""
    return {
        "recordings_base_path": str(RECORDINGS_BASE_PATH),
        "min_free_space_bytes": MIN_FREE_SPACE_BYTES,
        "write_metadata": True,
    }


class StorageConfig:
    """
    YAML-backed storage settings.

    Usage:
        config = StorageConfig()
        store = RecordingStore(config)

        # Tests point everything at a temp dir without touching the file
        config.set("recordings_base_path", "/tmp/rec", save=False)
    """

    def __init__(self, config_path: Optional[Path] = None, create_default: bool = True):
        """
        Args:
            config_path: YAML file to read (default: STORAGE_CONFIG_PATH)
            create_default: Write the defaults out if the file is missing
        """
        self.logger = logging.getLogger(__name__)
        self.config_path = Path(config_path or STORAGE_CONFIG_PATH)
        self.create_default = create_default

        self._values = self._read()

    def _read(self) -> Dict[str, Any]:
        values = default_storage_settings()

        if not self.config_path.exists():
            if self.create_default:
                self.logger.info(f"No storage config at {self.config_path}, writing defaults")
                self._write(values)
            self._check(values)
            return values

        try:
            with open(self.config_path, "r") as f:
                overrides = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self.logger.warning(f"Ignoring unreadable storage config {self.config_path}: {e}")
            overrides = {}

        if not isinstance(overrides, dict):
            self.logger.warning(f"Storage config {self.config_path} is not a mapping, ignoring it")
            overrides = {}

        values.update(overrides)
        self._check(values)

        self.logger.debug(f"Storage config read from {self.config_path}")
        return values

    def _check(self, values: Dict[str, Any]) -> None:
        """Raise ValueError for settings the store cannot work with"""
        base_path = Path(values["recordings_base_path"])
        if not base_path.is_absolute():
            raise ValueError(f"recordings_base_path must be absolute: {base_path}")

        if int(values["min_free_space_bytes"]) < 0:
            raise ValueError("min_free_space_bytes cannot be negative")

    def _write(self, values: Dict[str, Any]) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                yaml.safe_dump(values, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            # Read-only checkouts still work with the in-memory values
            self.logger.error(f"Could not write storage config {self.config_path}: {e}")
            return

        self.logger.info(f"Storage config written to {self.config_path}")

    @property
    def recordings_base_path(self) -> Path:
        return Path(self._values["recordings_base_path"])

    @property
    def min_free_space_bytes(self) -> int:
        return int(self._values["min_free_space_bytes"])

    @property
    def write_metadata(self) -> bool:
        """Write a JSON sidecar next to every recording"""
        return bool(self._values["write_metadata"])

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any, save: bool = True) -> None:
        """Change one setting, optionally persisting the whole file"""
        self._values[key] = value
        if save:
            self._write(self._values)

    def reload(self) -> None:
        """Re-read the YAML file"""
        self._values = self._read()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"StorageConfig(path={self.config_path})"
