from __future__ import annotations

from typing import Dict, List, Optional

from ..events import ChangeFeed
from .base import ORIGIN_FOREIGN, Storage


class InMemoryStorage(Storage):
    """Dict-backed storage, used by tests and embedded front ends."""

    def __init__(self, initial: Optional[Dict[str, str]] = None, changes: Optional[ChangeFeed] = None) -> None:
        super().__init__(changes)
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def keys(self) -> List[str]:
        return list(self._data)

    def _store(self, key: str, value: str) -> None:
        self._data[key] = value

    def _delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def inject(self, key: str, value: Optional[str]) -> None:
        """Apply a mutation made by another context sharing this store.

        A None value removes the key.
        """
        if value is None:
            if not self._delete(key):
                return
        else:
            self._store(key, value)
        self._notify(key, ORIGIN_FOREIGN)
