# repo_json.py
import json
import logging
import os
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A durable backend could not be read or reached."""


class StorageBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> bool: ...


class JSONFileBackend:
    """Key/value strings kept in one JSON object file.

    Every write goes to a temp file first and is swapped in with
    os.replace, so an interrupted write leaves the previous file intact.
    """

    def __init__(self, path: str):
        self.path = path
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageError(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def _write(self, obj: Dict[str, str]):
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(obj, f, indent=2)
        os.replace(tmp, self.path)

    # -------- Key/value --------
    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value under {key!r} is not a string")
        return value

    def set(self, key: str, value: str) -> bool:
        try:
            data = self._read()
        except StorageError as exc:
            logger.warning("Replacing unreadable storage file: %s", exc)
            data = {}
        data[key] = value
        try:
            self._write(data)
        except OSError as exc:
            logger.error("Writing %s failed: %s", self.path, exc)
            return False
        return True
