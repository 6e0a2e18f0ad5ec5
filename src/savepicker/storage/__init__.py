"""Key-value storage backends for savepicker files.

Every backend holds plain strings under string keys and publishes a
``StorageChange`` on its ``changes`` feed for each mutation, local or foreign.
"""
from .base import ORIGIN_FOREIGN, ORIGIN_LOCAL, Storage, StorageChange
from .json_file import JsonFileStorage
from .memory import InMemoryStorage

__all__ = [
    "ORIGIN_FOREIGN",
    "ORIGIN_LOCAL",
    "Storage",
    "StorageChange",
    "InMemoryStorage",
    "JsonFileStorage",
]
