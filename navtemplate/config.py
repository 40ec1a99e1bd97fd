# navtemplate/config.py
from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NAVTEMPLATE_CONFIG"

DEFAULT_CONFIG: Dict[str, Any] = {
    "app_group": "group.us.kothreat.NavTemplate",
    "data_dir": "~/.navtemplate",
    "menu": {
        "order_key": "MenuItemOrder",
        "bar_height": 90,
    },
    "logging": {
        "target": "NavTemplate",
        "level": "INFO",
        "max_lines": 1000,
    },
    "image_cache": {
        "memory_limit": 100,
        "icon_dir": "~/.navtemplate/icons",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """
    Config loader for a YAML file layered over built-in defaults.

    Usage:
        cfg = Config()  # loads config.yaml if one can be found
        height = cfg.get_nested("menu.bar_height", 90)
        raw = cfg.as_dict()
        cfg.reload()    # re-read the file (useful in dev)

    Parameters:
      config_file: path to YAML config (relative or absolute). $NAVTEMPLATE_CONFIG wins when set.
      defaults: values used for keys the file does not set (DEFAULT_CONFIG when omitted).
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        defaults: Optional[Dict[str, Any]] = None,
    ):
        self.config_file_arg = config_file or os.environ.get(CONFIG_ENV_VAR) or "config.yaml"
        self._defaults = copy.deepcopy(DEFAULT_CONFIG if defaults is None else defaults)

        self._config: Dict[str, Any] = {}
        self._source: Optional[str] = None  # 'file' or 'defaults'

        self._resolved_config_path: Optional[Path] = self._resolve_config_path(self.config_file_arg)
        self.reload()

    # ----- public API -----
    def reload(self) -> None:
        """Reload the configuration from disk."""
        file_values = self._load_file()
        if file_values is None:
            self._config = copy.deepcopy(self._defaults)
            self._source = "defaults"
        else:
            self._config = _deep_merge(self._defaults, file_values)
            self._source = "file"
        logger.debug("Config loaded from %s (keys=%s)", self._source, list(self._config.keys()))

    def as_dict(self) -> Dict[str, Any]:
        """Return the loaded configuration as a dict."""
        return copy.deepcopy(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """Shallow lookup in the top-level config dict."""
        return self._config.get(key, default)

    def get_nested(self, path: str, default: Any = None, sep: str = ".") -> Any:
        """
        Lookup nested keys using dot-path (e.g. "menu.bar_height").
        Returns default if any step is missing.
        """
        cur = self._config
        if not path:
            return default
        for part in path.split(sep):
            if not isinstance(cur, dict):
                return default
            if part in cur:
                cur = cur[part]
            else:
                return default
        return cur

    def get_path(self, path: str, default: Optional[str] = None) -> Path:
        """Like get_nested, but expands ``~`` and returns a Path."""
        value = self.get_nested(path, default)
        if value is None:
            raise ConfigError(f"Missing path setting '{path}'")
        return Path(str(value)).expanduser()

    @property
    def source(self) -> Optional[str]:
        """Return 'file' or 'defaults' depending on where config came from."""
        return self._source

    @property
    def resolved_config_path(self) -> Optional[Path]:
        """If a filesystem config was resolved, return its Path, otherwise None."""
        return self._resolved_config_path

    # ----- internal helpers -----
    def _resolve_config_path(self, config_file: str) -> Optional[Path]:
        """
        Try to resolve the YAML config path:
          1. If config_file is absolute and exists -> return it
          2. If config_file relative to cwd exists -> return it
          3. If config_file relative to the project root exists -> return it
          4. else return None
        """
        candidate = Path(config_file).expanduser()
        if candidate.is_absolute():
            return candidate.resolve() if candidate.exists() else None

        p1 = (Path.cwd() / candidate).resolve()
        if p1.exists():
            return p1

        project_root = Path(__file__).resolve().parent.parent
        p2 = (project_root / candidate).resolve()
        if p2.exists():
            return p2

        return None

    def _load_file(self) -> Optional[Dict[str, Any]]:
        if not self._resolved_config_path:
            return None
        try:
            with self._resolved_config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load config {self._resolved_config_path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config {self._resolved_config_path} must be a mapping")
        return data
