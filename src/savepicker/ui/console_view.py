from __future__ import annotations

import logging
import sys
from typing import Dict, Optional, TextIO

from ..files import FileRef
from .picker import PickerStateMachine
from .view import RenderModel

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: <number> select, name <text> edit name, <text> or an unlisted number save as, empty/ok accept, cancel/q cancel"


class ConsoleView:
    """Draws the picker as plain text."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out or sys.stdout
        self.closed = False

    def render(self, model: RenderModel) -> None:
        lines = [f"== {model.caption}"]
        for idx, entry in enumerate(model.listing):
            marker = ">" if entry.is_default_selected else " "
            lines.append(f"{marker} {idx}. {entry.label}")
        if model.show_name_field:
            suffix = "" if model.name_field_enabled else " (locked)"
            lines.append(f"Name: [{model.name}]{suffix}")
        if model.notice:
            lines.append(model.notice)
        accept = f"[{model.accept_label}]" if model.accept_enabled else f"({model.accept_label})"
        lines.append(f"[{model.cancel_label}] {accept}")
        self.out.write("\n".join(lines) + "\n")

    def close(self) -> None:
        self.closed = True


def handle_command(machine: PickerStateMachine, command: str, out: TextIO) -> None:
    """Route one line of user input to a picker intent."""
    cmd = command.strip()
    lowered = cmd.lower()
    if lowered in ("", "ok", "accept"):
        machine.accept()
    elif lowered in ("cancel", "q", "quit"):
        machine.cancel()
    elif lowered in ("?", "help"):
        out.write(HELP_TEXT + "\n")
    elif cmd.isdigit() and (not machine.session.for_save or int(cmd) < len(machine.listing)):
        machine.select_index(int(cmd))
    elif lowered.startswith("name "):
        machine.set_name(cmd[5:])
    elif machine.session.for_save:
        machine.submit_name(cmd)
    else:
        out.write(f"Unknown command: {cmd}\n")


def run_console_picker(
    dialog,
    for_save: bool,
    usage: Optional[str],
    game: Optional[str],
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Optional[FileRef]:
    """Run a picker on a terminal until it completes; return the chosen ref or None.

    Before each prompt the storage is synced (if it supports it) so files
    written by other processes show up. End of input cancels.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    outcome: Dict[str, Optional[FileRef]] = {}

    def on_complete(ref: Optional[FileRef]) -> None:
        outcome["ref"] = ref

    machine = dialog.open(for_save, usage, game, on_complete, ConsoleView(stdout))
    sync = getattr(machine.store.storage, "sync", None)
    while machine.is_open:
        if callable(sync):
            sync()
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            logger.debug("End of input; cancelling picker")
            machine.cancel()
            continue
        handle_command(machine, line, stdout)
    return outcome.get("ref")
