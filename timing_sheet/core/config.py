"""User preferences persisted as JSON.

Stored at ``~/.timing_sheet/config.json``. Only settings live here; clock
state and marks are never saved.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from .constants import (
    DEFAULT_FPS,
    DEFAULT_FRAME_SIZE,
    DEFAULT_PREPARE_SECONDS,
    DEFAULT_TOTAL_SECONDS,
)

log = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    "version": "1.0",
    "grid": {
        "total_seconds": DEFAULT_TOTAL_SECONDS,
        "frames_per_second": DEFAULT_FPS,
        "prepare_seconds": DEFAULT_PREPARE_SECONDS,
        "frame_width": DEFAULT_FRAME_SIZE,  # "small", "normal", "large"
        "frame_thickness": DEFAULT_FRAME_SIZE,
    },
    "ui": {
        "language": "en",  # "en", "ko", "ja"
    },
    "window": {
        "geometry": None,  # QByteArray base64
    },
}


class ConfigManager:
    """Manages user configuration with JSON persistence."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Custom config directory. If None, uses ~/.timing_sheet/
        """
        if config_dir is None:
            config_dir = Path.home() / ".timing_sheet"
        self.config_dir = config_dir
        self.config_file = config_dir / "config.json"
        self._config: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load config from disk or create default."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log.warning("Failed to create config directory %s: %s", self.config_dir, e)

        if self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    loaded = json.load(f)
                self._config = self._merge_defaults(loaded)
            except (json.JSONDecodeError, OSError) as e:
                log.warning("Failed to load config: %s. Using defaults.", e)
                self._config = copy.deepcopy(DEFAULT_CONFIG)
        else:
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self._save()

    def _merge_defaults(self, loaded: dict) -> dict:
        """Recursively merge loaded config with defaults."""
        def deep_merge(base: dict, override: dict) -> dict:
            merged = copy.deepcopy(base)
            for key, value in override.items():
                if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                    merged[key] = deep_merge(merged[key], value)
                else:
                    merged[key] = value
            return merged

        if not isinstance(loaded, dict):
            return copy.deepcopy(DEFAULT_CONFIG)
        return deep_merge(DEFAULT_CONFIG, loaded)

    def _save(self) -> None:
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
        except OSError as e:
            log.warning("Failed to save config: %s", e)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value using dot notation.

        Example:
            config.get("grid.total_seconds")
            config.get("ui.language", "en")
        """
        value = self._config
        for key in key_path.split("."):
            if isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set config value using dot notation and save."""
        keys = key_path.split(".")
        target = self._config
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = value
        self._save()

    def get_all(self) -> dict[str, Any]:
        return copy.deepcopy(self._config)

    def reset(self) -> None:
        """Reset config to defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._save()


_global_config: ConfigManager | None = None


def get_config() -> ConfigManager:
    """Get global config instance (singleton pattern)."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager()
    return _global_config
