from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from ..storage import Storage
from .catalog import FileCatalog
from .codec import DEFAULT_CODEC, ContentCodec
from .keys import FileRef, construct_ref
from .metadata import FileRecord, MetadataStore, now_millis

logger = logging.getLogger(__name__)


class FileStore:
    """File operations over a key-value storage.

    A file is two keys: a directory entry holding timestamps and a content
    key holding the serialized payload. The two writes are independent; an
    interruption between them leaves the entry pointing at stale content.
    """

    def __init__(
        self,
        storage: Storage,
        codec: ContentCodec = DEFAULT_CODEC,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.storage = storage
        self.codec = codec
        self.metadata = MetadataStore(storage, clock=clock)
        self.catalog = FileCatalog(storage, self.metadata)

    @staticmethod
    def construct_ref(
        filename: Optional[str] = None,
        usage: Optional[str] = None,
        game: Optional[str] = None,
    ) -> FileRef:
        return construct_ref(filename, usage, game)

    def ref_exists(self, ref: FileRef) -> bool:
        return self.metadata.exists(ref)

    def remove_ref(self, ref: FileRef) -> None:
        logger.debug("Removing %s", ref.entry_key)
        self.metadata.remove(ref)

    def write(self, ref: FileRef, content: Any, raw: bool = False) -> FileRecord:
        """Replace the whole content of the file, creating it if needed."""
        payload = self.codec.encode(content, raw)
        record = self.metadata.write(ref)
        self.storage.set(ref.content_key, payload)
        logger.debug("Wrote %d chars to %s", len(payload), ref.content_key)
        return record

    def read(self, ref: FileRef, raw: bool = False) -> Any:
        """Return the file content; never-written content reads as [] (or "" raw)."""
        return self.codec.decode(self.storage.get(ref.content_key), raw)

    def stat(self, ref: FileRef) -> Optional[FileRecord]:
        return self.metadata.read(ref)

    def list_files(self, usage: Optional[str] = None, game: Optional[str] = None) -> List[FileRecord]:
        return self.catalog.list(usage, game)
