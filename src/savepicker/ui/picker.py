from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from ..config import Settings
from ..errors import AlreadyOpenError, UnsupportedStorageError
from ..events import StorageChange
from ..files import FileRecord, FileRef, FileStore, construct_ref, sort_newest_first
from .view import HeadlessView, ListingEntry, PickerView, RenderModel, listing_label

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[Optional[FileRef]], None]


class PickerState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    CONFIRM_REPLACE = "confirm_replace"


@dataclass
class PickerSession:
    """Mutable state of one open picker."""

    for_save: bool
    usage: Optional[str]
    game: Optional[str]
    on_complete: Optional[CompletionCallback]
    confirming: bool = False
    listing: List[FileRecord] = field(default_factory=list)
    selected_index: int = 0
    name: str = ""
    caption: str = ""
    notice: Optional[str] = None
    accept_enabled: bool = True
    # A change arrived while confirming; refetch once the confirmation ends.
    stale: bool = False


class PickerStateMachine:
    """Interactive save/load picker bound to one storage.

    Every method runs to completion in response to one event: a user intent
    or a storage change notification. The completion callback fires exactly
    once, on a resolved accept or on a cancel that is not backing out of a
    replace confirmation. Once closed, every intent is ignored.
    """

    def __init__(
        self,
        session: PickerSession,
        store: FileStore,
        view: PickerView,
        settings: Settings,
        on_close: Optional[Callable[["PickerStateMachine"], None]] = None,
    ) -> None:
        self.session = session
        self.store = store
        self.view = view
        self.settings = settings
        self._on_close = on_close
        self._state = PickerState.CLOSED

    @property
    def state(self) -> PickerState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is not PickerState.CLOSED

    @property
    def listing(self) -> List[FileRecord]:
        return list(self.session.listing)

    def start(self) -> None:
        self._state = PickerState.OPEN
        self.store.storage.subscribe(self.handle_storage_change)
        self.refresh()

    # Storage notifications

    def handle_storage_change(self, change: StorageChange) -> None:
        if not self.is_open:
            return
        logger.debug("Noticed storage change: %s", change)
        if self.session.confirming:
            self.session.stale = True
            return
        self.refresh()

    def refresh(self) -> None:
        """Refetch the listing and recompute captions and the accept button."""
        s = self.session
        records = self.store.list_files(s.usage, s.game)
        if self.settings.listing.newest_first:
            records = sort_newest_first(records)
        s.listing = records
        s.selected_index = 0
        s.stale = False

        captions = self.settings.captions
        if s.for_save:
            s.caption = captions.save_prompt
            s.accept_enabled = True
        elif not records:
            s.caption = captions.load_empty
            s.accept_enabled = False
        else:
            s.caption = captions.load_prompt
            s.accept_enabled = True
        self._render()

    # User intents

    def select_index(self, index: int) -> None:
        s = self.session
        if not self.is_open or s.confirming:
            return
        if index < 0 or index >= len(s.listing):
            return
        s.selected_index = index
        s.name = s.listing[index].filename
        self._render()

    def set_name(self, text: str) -> None:
        if not self.is_open or self.session.confirming:
            return
        self.session.name = text
        self._render()

    def submit_name(self, name: str) -> None:
        if not self.is_open:
            return
        if self.session.for_save and not self.session.confirming:
            self.session.name = name
        self.accept()

    def accept(self) -> None:
        if not self.is_open:
            return
        if self.session.for_save:
            self._accept_save()
        else:
            self._accept_load()

    def cancel(self) -> None:
        if not self.is_open:
            return
        s = self.session
        if s.confirming:
            logger.debug("Replace of %r declined", s.name)
            s.confirming = False
            s.notice = None
            s.accept_enabled = True
            self._state = PickerState.OPEN
            if s.stale:
                self.refresh()
            else:
                self._render()
            return
        logger.debug("Picker cancelled")
        self._finish(None)

    # Internals

    def _accept_load(self) -> None:
        s = self.session
        index = s.selected_index
        if index < 0 or index >= len(s.listing):
            return
        ref = s.listing[index].ref
        if not self.store.ref_exists(ref):
            logger.debug("Selected file %s vanished; ignoring accept", ref.entry_key)
            return
        logger.debug("Selected %s", ref.entry_key)
        self._finish(ref)

    def _accept_save(self) -> None:
        s = self.session
        filename = s.name.strip()
        if not filename:
            return
        ref = construct_ref(filename, s.usage, s.game)
        if self.store.ref_exists(ref) and not s.confirming:
            s.confirming = True
            s.notice = self.settings.captions.replace_prompt.format(filename=ref.filename)
            self._state = PickerState.CONFIRM_REPLACE
            self._render()
            return
        logger.debug("Selected %s", ref.entry_key)
        self._finish(ref)

    def _finish(self, result: Optional[FileRef]) -> None:
        callback = self.session.on_complete
        self.session.on_complete = None
        self._state = PickerState.CLOSED
        self.store.storage.unsubscribe(self.handle_storage_change)
        if self._on_close is not None:
            self._on_close(self)
        try:
            self.view.close()
        finally:
            if callback is not None:
                callback(result)

    def render_model(self) -> RenderModel:
        s = self.session
        labels = self.settings.labels
        if s.confirming:
            accept_label = labels.replace
        else:
            accept_label = labels.save if s.for_save else labels.load
        listing = [
            ListingEntry(label=listing_label(rec, self.settings.listing), is_default_selected=idx == s.selected_index)
            for idx, rec in enumerate(s.listing)
        ]
        return RenderModel(
            caption=s.caption,
            listing=listing,
            name_field_enabled=not s.confirming,
            accept_label=accept_label,
            accept_enabled=s.accept_enabled,
            notice=s.notice,
            name=s.name,
            show_name_field=s.for_save,
            cancel_label=labels.cancel,
        )

    def _render(self) -> None:
        self.view.render(self.render_model())


class PickerFactory:
    """Opens picker sessions, at most one at a time."""

    def __init__(self, store: Optional[FileStore], settings: Optional[Settings] = None) -> None:
        self.store = store
        self.settings = settings or Settings()
        self._active: Optional[PickerStateMachine] = None

    @property
    def active(self) -> Optional[PickerStateMachine]:
        return self._active

    def open(
        self,
        for_save: bool,
        usage: Optional[str],
        game: Optional[str],
        on_complete: Optional[CompletionCallback],
        view: Optional[PickerView] = None,
    ) -> PickerStateMachine:
        """Open a picker; ``usage``/``game`` of None list files of any usage/game.

        Raises:
            AlreadyOpenError: a session from this factory is still open.
            UnsupportedStorageError: the factory has no storage.
        """
        if self._active is not None:
            raise AlreadyOpenError("Picker is already open.")
        if self.store is None:
            raise UnsupportedStorageError("No key-value storage is available.")

        session = PickerSession(for_save=for_save, usage=usage, game=game, on_complete=on_complete)
        machine = PickerStateMachine(
            session,
            self.store,
            view if view is not None else HeadlessView(),
            self.settings,
            on_close=self._release,
        )
        self._active = machine
        logger.debug("Opening %s picker (usage=%r, game=%r)", "save" if for_save else "load", usage, game)
        try:
            machine.start()
        except Exception:
            self.store.storage.unsubscribe(machine.handle_storage_change)
            self._active = None
            raise
        return machine

    def _release(self, machine: PickerStateMachine) -> None:
        if self._active is machine:
            self._active = None
