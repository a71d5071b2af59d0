from __future__ import annotations

import copy
import logging
import re
from typing import Any, Dict, Mapping, Optional

from .json_store import read_json_file

DEFAULT_SETTINGS_FILE = "settings.json"

_KEY_SEPARATORS = re.compile(r"[/.]")

logger = logging.getLogger(__name__)


def _resolve_nested(settings: Mapping[str, Any], path_key: str, default: Any = None) -> Any:
    if not path_key:
        return settings
    parts = [part for part in _KEY_SEPARATORS.split(path_key) if part]
    value: Any = settings
    for part in parts:
        if not isinstance(value, Mapping) or part not in value:
            return default
        value = value[part]
    return value


def _deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = copy.deepcopy(value)
    return base


class SettingsStore:
    """Read-only view over nested site settings.

    Keys are paths such as ``general/thumbnails/save_files``; ``.`` works as a
    separator too.
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None):
        self._settings: Dict[str, Any] = copy.deepcopy(dict(settings or {}))

    @classmethod
    def load(
        cls,
        settings_file: Optional[str] = DEFAULT_SETTINGS_FILE,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> "SettingsStore":
        """Build a store from the JSON settings file with *overrides* laid on top."""
        base: Dict[str, Any] = {}
        if settings_file:
            raw = read_json_file(settings_file, default={})
            if isinstance(raw, dict):
                base = raw
            else:
                logger.warning("Settings file %s does not hold a JSON object; ignoring it.", settings_file)
        if overrides:
            _deep_merge(base, overrides)
        return cls(base)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for *key* if present, else *default*."""
        return _resolve_nested(self._settings, key, default)

    def get_all(self) -> Dict[str, Any]:
        """Return a copy of all settings."""
        return copy.deepcopy(self._settings)


__all__ = ["DEFAULT_SETTINGS_FILE", "SettingsStore"]
