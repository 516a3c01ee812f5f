"""Service settings loaded from YAML.

The file defaults to 'config/advisor.yaml' in the working directory.
Set ADVISOR_CONFIG_PATH to override. Values in the file are merged over
DEFAULTS, so a partial (or missing) file is fine.
"""

import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

DEFAULTS = {
    "server": {"host": "0.0.0.0", "port": 8080},
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    },
    "api": {"include_candidates": True},
}


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class SettingsStore:
    def __init__(self, path: str | None = None):
        self.path = path or os.environ.get("ADVISOR_CONFIG_PATH", "config/advisor.yaml")
        self._cache = None

    def load(self) -> dict:
        if self._cache is None:
            data = {}
            if os.path.exists(self.path):
                with open(self.path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, dict):
                    raise ValueError(f"Settings file {self.path} must contain a mapping")
            else:
                logger.info("Settings file %s not found, using defaults", self.path)
            self._cache = _merge(copy.deepcopy(DEFAULTS), data)
        return self._cache

    def reload(self) -> dict:
        self._cache = None
        return self.load()

    def get(self, section: str, key: str, default=None):
        return self.load().get(section, {}).get(key, default)


settings_store = SettingsStore()
