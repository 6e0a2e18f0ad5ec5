from __future__ import annotations

from typing import Any, Callable, List, Optional

from .config import Settings
from .errors import UnsupportedStorageError
from .files import FileRecord, FileRef, FileStore
from .files.metadata import now_millis
from .storage import Storage
from .ui.picker import CompletionCallback, PickerFactory, PickerStateMachine
from .ui.view import PickerView


class SaveDialog:
    """Entry point for applications: file operations plus the picker.

    Compose one SaveDialog per process and share it; it owns the picker
    factory, so at most one picker can be open through it at a time.
    A SaveDialog without storage still constructs refs, but every storage
    operation raises UnsupportedStorageError.
    """

    def __init__(
        self,
        storage: Optional[Storage],
        settings: Optional[Settings] = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.settings = settings or Settings()
        self.files: Optional[FileStore] = FileStore(storage, clock=clock) if storage is not None else None
        self._pickers = PickerFactory(self.files, self.settings)

    @property
    def is_open(self) -> bool:
        return self._pickers.active is not None

    @property
    def active(self) -> Optional[PickerStateMachine]:
        return self._pickers.active

    def open(
        self,
        for_save: bool,
        usage: Optional[str],
        game: Optional[str],
        on_complete: Optional[CompletionCallback],
        view: Optional[PickerView] = None,
    ) -> PickerStateMachine:
        """Open a save (``for_save=True``) or load picker.

        ``on_complete`` receives the chosen FileRef, or None if the user
        cancelled. Pass None for ``usage`` or ``game`` to list files of any
        usage or game.
        """
        return self._pickers.open(for_save, usage, game, on_complete, view)

    @staticmethod
    def construct_ref(
        filename: Optional[str] = None,
        usage: Optional[str] = None,
        game: Optional[str] = None,
    ) -> FileRef:
        return FileStore.construct_ref(filename, usage, game)

    def ref_exists(self, ref: FileRef) -> bool:
        return self._require_files().ref_exists(ref)

    def remove_ref(self, ref: FileRef) -> None:
        self._require_files().remove_ref(ref)

    def write(self, ref: FileRef, content: Any, raw: bool = False) -> FileRecord:
        return self._require_files().write(ref, content, raw)

    def read(self, ref: FileRef, raw: bool = False) -> Any:
        return self._require_files().read(ref, raw)

    def list_files(self, usage: Optional[str] = None, game: Optional[str] = None) -> List[FileRecord]:
        return self._require_files().list_files(usage, game)

    def _require_files(self) -> FileStore:
        if self.files is None:
            raise UnsupportedStorageError("No key-value storage is available.")
        return self.files
