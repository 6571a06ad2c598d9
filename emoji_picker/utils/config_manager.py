# config_manager.py - JSON config manager

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV = "EMOJI_PICKER_CONFIG"
DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".emoji_picker", "config.json")

DEFAULTS: Dict[str, Any] = {
    "tolerance": 5,  # max edit distance for fuzzy matches
    "max_suggestions": 5,
    "prefix_filter": False,  # also require suggestions to start with the query
    "index_path": None,  # None = packaged index
    "tick_rate": 0.25,  # seconds between redraws when idle
    "log_file": None,
}


class Config:
    def __init__(self, path: Optional[str] = None):
        self.path = path or os.environ.get(CONFIG_ENV) or DEFAULT_PATH
        self.data = dict(DEFAULTS)
        self._load()

    def _load(self):
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable config %s: %s", self.path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("ignoring config %s: top level is not an object", self.path)
            return
        for k, v in loaded.items():
            if k not in DEFAULTS:
                logger.warning("unknown config option %r in %s", k, self.path)
                continue
            try:
                self.data[k] = self._coerce(k, v)
            except (TypeError, ValueError):
                logger.warning("bad value for %r in %s: %r", k, self.path, v)

    @staticmethod
    def _coerce(key, val):
        default = DEFAULTS[key]
        if val is None:
            return val
        if default is None:
            # path options
            if not isinstance(val, str):
                raise TypeError(f"expected a path string, got {type(val).__name__}")
            return val
        if isinstance(default, bool):
            if isinstance(val, str):
                if val.lower() in ("1", "true", "yes", "on"):
                    return True
                if val.lower() in ("0", "false", "no", "off"):
                    return False
                raise ValueError(val)
            return bool(val)
        return type(default)(val)

    def save(self):
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def __getitem__(self, key):
        return self.data[key]

    def set(self, key, val):
        if key not in DEFAULTS:
            raise KeyError(f"No such option: {key}")
        self.data[key] = self._coerce(key, val)
