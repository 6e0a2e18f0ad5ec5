from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..storage import Storage
from .keys import FileRef

logger = logging.getLogger(__name__)

FIELD_CREATED = "created"
FIELD_MODIFIED = "modified"


def now_millis() -> int:
    return int(time.time() * 1000)


def _to_datetime(millis: Optional[int]) -> Optional[datetime]:
    if millis is None:
        return None
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


@dataclass
class FileRecord:
    """Directory entry of a stored file. Timestamps are epoch milliseconds."""

    ref: FileRef
    created: Optional[int] = None
    modified: Optional[int] = None

    @property
    def filename(self) -> str:
        return self.ref.filename

    @property
    def created_at(self) -> Optional[datetime]:
        return _to_datetime(self.created)

    @property
    def modified_at(self) -> Optional[datetime]:
        return _to_datetime(self.modified)


def parse_entry(ref: FileRef, text: str) -> FileRecord:
    """Parse comma-joined ``field:value`` pairs; unknown fields are ignored."""
    record = FileRecord(ref=ref)
    for item in text.split(","):
        name, sep, value = item.partition(":")
        if not sep or name not in (FIELD_CREATED, FIELD_MODIFIED):
            continue
        try:
            millis = int(value)
        except ValueError:
            logger.debug("Ignoring unparsable %s=%r in %s", name, value, ref.entry_key)
            continue
        setattr(record, name, millis)
    return record


def format_entry(record: FileRecord) -> str:
    fields: List[str] = []
    if record.created is not None:
        fields.append(f"{FIELD_CREATED}:{record.created}")
    if record.modified is not None:
        fields.append(f"{FIELD_MODIFIED}:{record.modified}")
    return ",".join(fields)


class MetadataStore:
    """Reads and writes the directory entry stored under a ref's entry key."""

    def __init__(self, storage: Storage, clock: Callable[[], int] = now_millis) -> None:
        self.storage = storage
        self._clock = clock

    def read(self, ref: FileRef) -> Optional[FileRecord]:
        text = self.storage.get(ref.entry_key)
        if text is None:
            return None
        return parse_entry(ref, text)

    def write(self, ref: FileRef) -> FileRecord:
        """Touch the entry: keep ``created`` if the file existed, refresh ``modified``."""
        now = self._clock()
        record = self.read(ref)
        if record is None:
            record = FileRecord(ref=ref, created=now)
        record.modified = now
        self.storage.set(ref.entry_key, format_entry(record))
        return record

    def exists(self, ref: FileRef) -> bool:
        return self.storage.get(ref.entry_key) is not None

    def remove(self, ref: FileRef) -> None:
        self.storage.remove(ref.entry_key)
        self.storage.remove(ref.content_key)

