from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Protocol

from ..config import ListingSettings
from ..files import FileRecord


@dataclass(frozen=True)
class ListingEntry:
    label: str
    is_default_selected: bool = False


@dataclass(frozen=True)
class RenderModel:
    """Everything a front end needs to draw the picker.

    Attributes:
        caption: Upper caption (prompt or "no files" message).
        listing: One entry per file, in display order.
        name_field_enabled: False while a replace is being confirmed.
        accept_label: Text of the accept button ("Save", "Load" or "Replace").
        accept_enabled: False for a load picker with nothing to load.
        notice: Lower caption used for the replace confirmation, or None.
        name: Current content of the name field.
        show_name_field: Only save pickers show a name field.
        cancel_label: Text of the cancel button.
    """

    caption: str
    listing: List[ListingEntry] = field(default_factory=list)
    name_field_enabled: bool = True
    accept_label: str = "Save"
    accept_enabled: bool = True
    notice: Optional[str] = None
    name: str = ""
    show_name_field: bool = True
    cancel_label: str = "Cancel"

    @property
    def selected_index(self) -> int:
        for idx, entry in enumerate(self.listing):
            if entry.is_default_selected:
                return idx
        return -1


class PickerView(Protocol):
    """Presentation side of a picker session.

    Views only draw; user intents go back through the session's
    select_index / set_name / submit_name / accept / cancel methods.
    """

    def render(self, model: RenderModel) -> None:
        ...

    def close(self) -> None:
        ...


class HeadlessView:
    """View that just remembers what it was asked to draw."""

    def __init__(self) -> None:
        self.history: List[RenderModel] = []
        self.closed = False

    @property
    def last(self) -> Optional[RenderModel]:
        return self.history[-1] if self.history else None

    def render(self, model: RenderModel) -> None:
        self.history.append(model)

    def close(self) -> None:
        self.closed = True


def format_date(millis: Optional[int], missing: str = "???") -> str:
    """Short local date like ``3/14 9:05``."""
    if millis is None:
        return missing
    dt = datetime.fromtimestamp(millis / 1000)
    return f"{dt.month}/{dt.day} {dt.hour}:{dt.minute:02d}"


def listing_label(record: FileRecord, listing: ListingSettings) -> str:
    return listing.label_template.format(
        filename=record.filename,
        date=format_date(record.modified, listing.missing_date),
    )
