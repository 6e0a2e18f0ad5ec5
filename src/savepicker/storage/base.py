from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..events import ORIGIN_FOREIGN, ORIGIN_LOCAL, ChangeFeed, ChangeListener, StorageChange

logger = logging.getLogger(__name__)

__all__ = ["ORIGIN_FOREIGN", "ORIGIN_LOCAL", "Storage", "StorageChange"]


class Storage(ABC):
    """Flat string key-value store with whole-value access and a change feed."""

    def __init__(self, changes: Optional[ChangeFeed] = None) -> None:
        self.changes = changes if changes is not None else ChangeFeed()

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Return every key currently held."""

    @abstractmethod
    def _store(self, key: str, value: str) -> None:
        """Persist a single value."""

    @abstractmethod
    def _delete(self, key: str) -> bool:
        """Delete a key; return False if it was not present."""

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"storage values must be str, not {type(value).__name__}")
        self._store(key, value)
        self._notify(key, ORIGIN_LOCAL)

    def remove(self, key: str) -> None:
        if self._delete(key):
            self._notify(key, ORIGIN_LOCAL)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    # Change feed

    def subscribe(self, listener: ChangeListener) -> None:
        self.changes.subscribe(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        self.changes.unsubscribe(listener)

    def _notify(self, key: Optional[str], origin: str) -> None:
        self.changes.publish(StorageChange(key=key, origin=origin))
