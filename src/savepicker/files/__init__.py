"""Files kept in a flat key-value storage.

Layout per file, with ``key = usage + ":" + game + ":" + filename``:

- ``"dirent:" + key`` holds ``created:<ms>,modified:<ms>``
- ``"content:" + key`` holds the serialized content
"""
from .catalog import FileCatalog, ref_matches, sort_newest_first
from .codec import ContentCodec, decode_content, encode_content
from .keys import FileRef, construct_ref, decode_ref
from .metadata import FileRecord, MetadataStore
from .store import FileStore

__all__ = [
    "ContentCodec",
    "FileCatalog",
    "FileRecord",
    "FileRef",
    "FileStore",
    "MetadataStore",
    "construct_ref",
    "decode_content",
    "decode_ref",
    "encode_content",
    "ref_matches",
    "sort_newest_first",
]
