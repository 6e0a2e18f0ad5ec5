from __future__ import annotations

import logging
from typing import List, Optional

from ..storage import Storage
from .keys import FileRef, decode_ref
from .metadata import FileRecord, MetadataStore

logger = logging.getLogger(__name__)


def ref_matches(ref: FileRef, usage: Optional[str], game: Optional[str]) -> bool:
    """None filters match anything; otherwise the field must be equal."""
    if usage is not None and ref.usage != usage:
        return False
    if game is not None and ref.game != game:
        return False
    return True


def sort_newest_first(records: List[FileRecord]) -> List[FileRecord]:
    """Order records by modification time, most recent first; undated last."""
    return sorted(
        records,
        key=lambda r: (r.modified is not None, r.modified or 0),
        reverse=True,
    )


class FileCatalog:
    """Enumerates the files held in a storage, optionally filtered."""

    def __init__(self, storage: Storage, metadata: Optional[MetadataStore] = None) -> None:
        self.storage = storage
        self.metadata = metadata or MetadataStore(storage)

    def list(self, usage: Optional[str] = None, game: Optional[str] = None) -> List[FileRecord]:
        """Return a record for every entry key matching the filters, in no particular order."""
        records: List[FileRecord] = []
        for key in self.storage.keys():
            ref = decode_ref(key)
            if ref is None or not ref_matches(ref, usage, game):
                continue
            record = self.metadata.read(ref)
            if record is not None:
                records.append(record)
        logger.debug("Catalog found %d files (usage=%r, game=%r)", len(records), usage, game)
        return records
