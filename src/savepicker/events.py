"""Change feed shared by every storage backend.

A storage publishes one :class:`StorageChange` per key it sets or removes,
whether the write came from this process or was picked up from another one.
"""

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

ORIGIN_LOCAL = "local"
ORIGIN_FOREIGN = "foreign"


@dataclass(frozen=True)
class StorageChange:
    """One key changed.

    ``key`` is None when the source cannot tell which key changed.
    """

    key: Optional[str]
    origin: str = ORIGIN_LOCAL

    @property
    def foreign(self) -> bool:
        return self.origin == ORIGIN_FOREIGN


ChangeListener = Callable[[StorageChange], None]


class ChangeFeed:
    """Delivers storage changes to listeners in subscription order.

    A listener that raises is logged and the remaining listeners still run,
    so one broken view cannot stop another from refreshing.
    """

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []
        self._lock = RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def subscribe(self, listener: ChangeListener) -> None:
        if not callable(listener):
            raise TypeError("listener must be callable")
        with self._lock:
            self._listeners.append(listener)
        logger.debug("Change listener added: %s", getattr(listener, "__qualname__", listener))

    def unsubscribe(self, listener: ChangeListener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                logger.debug("Change listener removed: %s", getattr(listener, "__qualname__", listener))

    def publish(self, change: StorageChange) -> None:
        with self._lock:
            listeners = list(self._listeners)
        logger.debug("Publishing %s to %d listeners", change, len(listeners))
        for listener in listeners:
            try:
                listener(change)
            except Exception:
                logger.exception("Change listener failed for key %r", change.key)
