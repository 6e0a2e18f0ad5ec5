from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import StorageCorruptError
from ..events import ChangeFeed
from .base import ORIGIN_FOREIGN, Storage

logger = logging.getLogger(__name__)


def atomic_write_json(path: Path, obj: Dict[str, str]) -> None:
    """Atomically replace ``path`` with the JSON encoding of ``obj``.

    Either the old file remains or the new file fully replaces it.
    """
    data = json.dumps(obj, separators=(",", ":"), sort_keys=True).encode("utf-8")
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=path.name, dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    finally:
        try:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
        except OSError:
            logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)


class JsonFileStorage(Storage):
    """Storage persisted as one JSON object in a file.

    Several processes may share the same file. Each instance keeps an
    in-memory view; ``sync()`` re-reads the file and publishes a foreign
    change for every key that differs. Mutations sync first so that a write
    never clobbers keys another process added in the meantime.
    """

    def __init__(self, path: str | Path, changes: Optional[ChangeFeed] = None) -> None:
        super().__init__(changes)
        self.path = Path(path)
        self._data: Dict[str, str] = self._read_file()

    def _read_file(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                text = f.read()
        except OSError as exc:
            raise StorageCorruptError(f"Unable to read storage file {self.path}: {exc}") from exc
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageCorruptError(f"Invalid JSON in storage file {self.path}: {exc}") from exc
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise StorageCorruptError(f"Storage file {self.path} must hold an object of strings")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def keys(self) -> List[str]:
        return list(self._data)

    def set(self, key: str, value: str) -> None:
        self.sync()
        super().set(key, value)

    def remove(self, key: str) -> None:
        self.sync()
        super().remove(key)

    def _store(self, key: str, value: str) -> None:
        self._data[key] = value
        atomic_write_json(self.path, self._data)

    def _delete(self, key: str) -> bool:
        if key not in self._data:
            return False
        del self._data[key]
        atomic_write_json(self.path, self._data)
        return True

    def sync(self) -> List[str]:
        """Pick up changes written to the file by other processes.

        Returns the changed keys, in sorted order, after notifying subscribers.
        """
        fresh = self._read_file()
        changed = sorted(
            k for k in set(self._data) | set(fresh) if self._data.get(k) != fresh.get(k)
        )
        self._data = fresh
        if changed:
            logger.debug("Storage file %s changed externally: %d keys", self.path, len(changed))
        for key in changed:
            self._notify(key, ORIGIN_FOREIGN)
        return changed
