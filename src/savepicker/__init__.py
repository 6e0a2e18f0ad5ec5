"""
savepicker: save/load files kept in a flat key-value store.

A "file" is a pair of string keys in a key-value storage: a directory entry
with timestamps and the serialized content. On top of that sits an
interactive picker that lets a user name a file to save or choose one to
load, staying in sync while other sessions modify the same storage.

Front ends (console, Arcade) render the picker's RenderModel and send user
intents back; the picker itself has no rendering code.
"""
from .config import Settings
from .dialog import SaveDialog
from .errors import (
    AlreadyOpenError,
    ContentDecodeError,
    ContentTypeError,
    SavePickerError,
    StorageCorruptError,
    UnsupportedStorageError,
)
from .files import FileRecord, FileRef, FileStore, construct_ref, decode_ref
from .storage import InMemoryStorage, JsonFileStorage, Storage, StorageChange

__all__ = [
    "AlreadyOpenError",
    "ContentDecodeError",
    "ContentTypeError",
    "FileRecord",
    "FileRef",
    "FileStore",
    "InMemoryStorage",
    "JsonFileStorage",
    "SaveDialog",
    "SavePickerError",
    "Settings",
    "Storage",
    "StorageChange",
    "StorageCorruptError",
    "UnsupportedStorageError",
    "construct_ref",
    "decode_ref",
]
