# navtemplate/defaults.py
"""
Shared key/value defaults for one app group, stored as a YAML file.

The app, its settings screens and the CLI all read the same file, so every
write goes through a temp file and an atomic replace.
"""
import base64
import binascii
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import DefaultsError

logger = logging.getLogger(__name__)


class DefaultsStore:
    """
    A small persistent dictionary.

    :param path: The YAML file backing the store. Created on first write.
    """
    def __init__(self, path):
        self.path = Path(path)
        self._data: Dict[str, Any] = self._load()

    # ----- public API -----
    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._save()

    def remove_many(self, keys: List[str]) -> None:
        """Remove several keys with a single write."""
        removed = False
        for key in keys:
            if key in self._data:
                del self._data[key]
                removed = True
        if removed:
            self._save()

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def dictionary_representation(self) -> Dict[str, Any]:
        return dict(self._data)

    def get_dict(self, key: str) -> Optional[Dict[str, Any]]:
        value = self._data.get(key)
        return value if isinstance(value, dict) else None

    def get_string_list(self, key: str) -> Optional[List[str]]:
        value = self._data.get(key)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return list(value)
        return None

    def set_string_list(self, key: str, values: List[str]) -> None:
        self.set(key, list(values))

    def get_bytes(self, key: str) -> Optional[bytes]:
        value = self._data.get(key)
        if not isinstance(value, str):
            return None
        try:
            return base64.b64decode(value.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError):
            logger.warning("Defaults key %s does not hold base64 data", key)
            return None

    def set_bytes(self, key: str, data: bytes) -> None:
        self.set(key, base64.b64encode(data).decode("ascii"))

    def reload(self) -> None:
        """Re-read the file, picking up writes made by other processes."""
        self._data = self._load()

    # ----- internal helpers -----
    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            raise DefaultsError(f"Cannot read defaults file {self.path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DefaultsError(f"Defaults file {self.path} does not hold a mapping")
        return data

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".defaults-", dir=str(self.path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    yaml.safe_dump(self._data, fh, allow_unicode=True, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise DefaultsError(f"Cannot write defaults file {self.path}: {e}") from e

    def __repr__(self):
        return f"DefaultsStore({str(self.path)!r}, keys={len(self._data)})"
