from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DELIMITER = ":"
ENTRY_PREFIX = "dirent:"
CONTENT_PREFIX = "content:"


@dataclass(frozen=True)
class FileRef:
    """Identity of one stored file: a (usage, game, filename) triple.

    A FileRef does not create anything; it only names the two storage keys a
    file lives under. The keys are derived, so two refs with the same triple
    compare equal.

    Attributes:
        filename: Any string, delimiters included.
        usage: Category of the file (e.g. "save"). Must not contain ":" for the
            key to decode back to the same triple.
        game: Identifier of the owning game. Same restriction as usage.
    """
    filename: str
    usage: str
    game: str

    @property
    def key(self) -> str:
        return self.usage + DELIMITER + self.game + DELIMITER + self.filename

    @property
    def entry_key(self) -> str:
        return ENTRY_PREFIX + self.key

    @property
    def content_key(self) -> str:
        return CONTENT_PREFIX + self.key


def construct_ref(
    filename: Optional[str] = None,
    usage: Optional[str] = None,
    game: Optional[str] = None,
) -> FileRef:
    """Build a FileRef; missing arguments become the empty string."""
    return FileRef(filename=filename or "", usage=usage or "", game=game or "")


def decode_ref(entry_key: str) -> Optional[FileRef]:
    """Recover a FileRef from an entry key, or None if it is not one.

    Usage and game are read up to the first and second delimiter after the
    prefix; everything after that is the filename.
    """
    if not entry_key.startswith(ENTRY_PREFIX):
        return None
    usage, sep, rest = entry_key[len(ENTRY_PREFIX):].partition(DELIMITER)
    if not sep:
        return None
    game, sep, filename = rest.partition(DELIMITER)
    if not sep:
        return None
    return FileRef(filename=filename, usage=usage, game=game)
