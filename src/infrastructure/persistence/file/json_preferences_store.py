"""
JSON preferences store.

Key/value preferences persisted to a single JSON file (see
src.utils.paths.get_preferences_path). Values must be JSON-serializable.
"""
import json
import os
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Optional, Union

from src.utils.message import Log


class JsonPreferencesStore:
    """
    Preferences persisted as one JSON object.

    The file is read once on construction and rewritten on every set().
    A missing or unreadable file starts an empty store.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = RLock()
        self._data: Dict[str, Any] = self._read()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value
            self._write()
        Log.debug(f"JsonPreferencesStore: Updated preference: {key}")

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._data:
                return False
            del self._data[key]
            self._write()
            return True

    def get_all(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._data)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as file:
                data = json.load(file)
        except (OSError, json.JSONDecodeError) as e:
            Log.error(f"JsonPreferencesStore: Failed to read {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            Log.warning(f"JsonPreferencesStore: Ignoring non-object preferences file {self.path}")
            return {}
        return data

    def _write(self) -> None:
        os.makedirs(self.path.parent, exist_ok=True)
        tmp_path: Optional[Path] = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as file:
            json.dump(self._data, file, indent=4)
        os.replace(tmp_path, self.path)
