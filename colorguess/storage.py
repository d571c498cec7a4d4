"""String-valued key/value persistence (a localStorage work-alike)."""

import json
import logging
import os
import tempfile
from typing import Dict, Optional, Protocol, runtime_checkable

log = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):
    """
    String key/value store used by the leaderboard.

    get returns None for a missing key. Any method may raise OSError or
    ValueError when the medium is unavailable or its contents are unreadable.
    """

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str): ...

    def remove(self, key: str): ...


class MemoryStorage:
    """In-process storage; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value

    def remove(self, key: str):
        self._data.pop(key, None)


class JsonFileStorage:
    """
    Storage backed by one JSON object of string values on disk.

    Every write rewrites the whole file through a temporary file and
    os.replace, so a crash never leaves a half-written file behind.
    Read errors propagate as OSError / ValueError.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]):
        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str):
        try:
            data = self._read_all()
        except ValueError:
            log.warning("Overwriting unreadable storage file %s", self.path)
            data = {}
        data[key] = value
        self._write_all(data)

    def remove(self, key: str):
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
