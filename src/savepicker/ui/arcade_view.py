from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover
    arcade = None  # type: ignore

from ..files import FileRef
from .picker import PickerStateMachine
from .view import RenderModel
from .widgets import Button, ListBox, TextField

log = logging.getLogger(__name__)

ACTION_ACCEPT = "accept"
ACTION_CANCEL = "cancel"
ACTION_BACKSPACE = "backspace"
ACTION_UP = "up"
ACTION_DOWN = "down"


def default_key_actions() -> Dict[int, str]:
    if arcade is None:
        return {}
    return {
        arcade.key.ENTER: ACTION_ACCEPT,
        arcade.key.RETURN: ACTION_ACCEPT,
        arcade.key.ESCAPE: ACTION_CANCEL,
        arcade.key.BACKSPACE: ACTION_BACKSPACE,
        arcade.key.UP: ACTION_UP,
        arcade.key.DOWN: ACTION_DOWN,
    }


class ArcadePickerView:
    """Arcade front end for a picker session.

    The view lays out widgets from each RenderModel it receives and turns
    mouse, keyboard and text events into picker intents. It holds no picker
    state of its own.
    """

    def __init__(
        self,
        width: int = 520,
        height: int = 380,
        key_actions: Optional[Dict[int, str]] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.key_actions = key_actions if key_actions is not None else default_key_actions()
        self.machine: Optional[PickerStateMachine] = None
        self.window = None
        self.model: Optional[RenderModel] = None
        self.closed = False
        self.list_box = ListBox(left=30, top=height - 80, width=width - 60, row_height=26)
        self.name_field = TextField(x=width / 2, y=130, width=width - 60, height=32)
        self.buttons: List[Button] = []

    def bind(self, machine: PickerStateMachine) -> None:
        self.machine = machine

    # PickerView

    def render(self, model: RenderModel) -> None:
        self.model = model
        self.list_box.rows = [entry.label for entry in model.listing]
        self.list_box.selected = model.selected_index
        self.list_box.ensure_visible()
        self.name_field.text = model.name
        self.name_field.enabled = model.show_name_field and model.name_field_enabled
        cx = self.width / 2
        self.buttons = [
            Button(cx - 80, 40, 140, 40, model.cancel_label, self._intent(ACTION_CANCEL)),
            Button(cx + 80, 40, 140, 40, model.accept_label, self._intent(ACTION_ACCEPT), enabled=model.accept_enabled),
        ]

    def close(self) -> None:
        self.closed = True
        if self.window is not None:  # pragma: no cover - needs a display
            self.window.close()

    # Input

    def _intent(self, action: str) -> Callable[[], None]:
        return lambda: self.perform(action)

    def perform(self, action: str) -> None:
        machine = self.machine
        if machine is None or self.model is None:
            return
        if action == ACTION_ACCEPT:
            machine.accept()
        elif action == ACTION_CANCEL:
            machine.cancel()
        elif action == ACTION_BACKSPACE:
            if self.name_field.enabled:
                machine.set_name(self.model.name[:-1])
        elif action in (ACTION_UP, ACTION_DOWN):
            step = -1 if action == ACTION_UP else 1
            machine.select_index(max(0, self.model.selected_index + step))

    def on_mouse_press(self, x: float, y: float, button: int = 0, modifiers: int = 0) -> bool:
        for b in self.buttons:
            if b.hit_test(x, y):
                b.click()
                return True
        idx = self.list_box.index_at(x, y)
        if idx is not None and self.machine is not None:
            self.machine.select_index(idx)
            return True
        return False

    def on_key_press(self, symbol: int, modifiers: int = 0) -> bool:
        action = self.key_actions.get(symbol)
        if action is None:
            return False
        self.perform(action)
        return True

    def on_text(self, text: str) -> bool:
        if self.machine is None or self.model is None or not self.name_field.enabled:
            return False
        printable = "".join(ch for ch in text if ch.isprintable())
        if not printable:
            return False
        self.machine.set_name(self.model.name + printable)
        return True

    def on_draw(self) -> bool:  # pragma: no cover - rendering
        if arcade is None or self.model is None:
            return False
        if self.window is not None:
            self.window.clear()
        arcade.draw_text(
            self.model.caption, 30, self.height - 40, arcade.color.WHITE, 16, anchor_y="center"
        )
        self.list_box.draw()
        if self.model.show_name_field:
            self.name_field.draw()
        if self.model.notice:
            arcade.draw_text(
                self.model.notice,
                30,
                90,
                arcade.color.YELLOW,
                13,
                width=self.width - 60,
                multiline=True,
                anchor_y="center",
            )
        for b in self.buttons:
            b.draw()
        return True


def run_picker_window(
    dialog,
    for_save: bool,
    usage: Optional[str],
    game: Optional[str],
    poll_interval: float = 1.0,
    title: str = "Save Picker",
) -> Optional[FileRef]:  # pragma: no cover - needs a display
    """Show a picker in an Arcade window and block until it completes.

    Closing the window counts as a cancel.
    """
    if arcade is None:
        raise RuntimeError("arcade is not available")
    outcome: Dict[str, Optional[FileRef]] = {}

    def on_complete(ref: Optional[FileRef]) -> None:
        outcome["ref"] = ref

    view = ArcadePickerView()
    window = arcade.Window(view.width, view.height, title)
    view.window = window
    machine = dialog.open(for_save, usage, game, on_complete, view)
    view.bind(machine)
    window.push_handlers(
        on_draw=view.on_draw,
        on_mouse_press=view.on_mouse_press,
        on_key_press=view.on_key_press,
        on_text=view.on_text,
    )

    sync = getattr(machine.store.storage, "sync", None)

    def poll(delta_time: float) -> None:
        if callable(sync) and machine.is_open:
            sync()

    arcade.schedule(poll, poll_interval)
    try:
        arcade.run()
    finally:
        arcade.unschedule(poll)
    if machine.is_open:
        log.debug("Picker window closed without a choice")
    while machine.is_open:
        machine.cancel()
    return outcome.get("ref")
