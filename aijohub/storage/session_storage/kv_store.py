import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from aijohub.core.logger import logger


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """
    Flat string->string map persisted as a JSON object.

    Writes go through a temp file in the same directory and `os.replace`,
    so a crash never leaves a half-written file. A missing or unreadable
    file reads as empty.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("[KVStore] corrupt store ignored path=%s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("[KVStore] unexpected store shape ignored path=%s", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)


def make_kv_store(path: Optional[str] = None) -> KeyValueStore:
    if path:
        logger.debug("[KVStore] using file store path=%s", path)
        return JsonFileKeyValueStore(path)
    return MemoryKeyValueStore()
