import argparse
import json
import logging
import sys
from pathlib import Path

from .config import Settings
from .dialog import SaveDialog
from .errors import SavePickerError
from .files import sort_newest_first
from .logging_config import configure_logging
from .storage import JsonFileStorage

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="savepicker",
        description="Manage files kept in a savepicker key-value store.",
    )
    parser.add_argument("--storage", type=Path, default=None, help="Path of the JSON storage file.")
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument("--usage", default=None, help="File usage (category), e.g. 'save'.")
    parser.add_argument("--game", default=None, help="Game identifier the files belong to.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List files matching --usage/--game.")

    show = sub.add_parser("show", help="Print the content of a file.")
    show.add_argument("name")
    show.add_argument("--raw", action="store_true", help="Print the stored string as is.")

    write = sub.add_parser("write", help="Write stdin to a file (JSON unless --raw).")
    write.add_argument("name")
    write.add_argument("--raw", action="store_true", help="Store stdin as a plain string.")

    remove = sub.add_parser("remove", help="Delete a file.")
    remove.add_argument("name")

    for cmd in ("pick", "window"):
        p = sub.add_parser(cmd, help=f"Choose a file interactively ({'console' if cmd == 'pick' else 'Arcade window'}).")
        p.add_argument("mode", choices=("save", "load"))
    return parser.parse_args(argv)


def _cmd_list(dialog: SaveDialog, args) -> int:
    for record in sort_newest_first(dialog.list_files(args.usage, args.game)):
        modified = record.modified_at.isoformat(timespec="seconds") if record.modified_at else "-"
        ref = record.ref
        print(f"{ref.usage}\t{ref.game}\t{ref.filename}\t{modified}")
    return 0


def _cmd_show(dialog: SaveDialog, args) -> int:
    ref = dialog.construct_ref(args.name, args.usage, args.game)
    if not dialog.ref_exists(ref):
        print(f"No such file: {ref.filename}", file=sys.stderr)
        return 1
    content = dialog.read(ref, raw=args.raw)
    if args.raw:
        sys.stdout.write(content)
    else:
        print(json.dumps(content, indent=2, ensure_ascii=False))
    return 0


def _cmd_write(dialog: SaveDialog, args) -> int:
    ref = dialog.construct_ref(args.name, args.usage, args.game)
    text = sys.stdin.read()
    if args.raw:
        content = text
    else:
        try:
            content = json.loads(text) if text.strip() else []
        except json.JSONDecodeError as e:
            print(f"Input is not valid JSON: {e}", file=sys.stderr)
            return 1
    dialog.write(ref, content, raw=args.raw)
    logger.info("Wrote %s", ref.entry_key)
    return 0


def _cmd_remove(dialog: SaveDialog, args) -> int:
    dialog.remove_ref(dialog.construct_ref(args.name, args.usage, args.game))
    return 0


def _cmd_pick(dialog: SaveDialog, args, settings: Settings) -> int:
    """Run an interactive picker; exit 1 when the user cancels."""
    for_save = args.mode == "save"
    if args.command == "window":
        from .ui.arcade_view import run_picker_window

        ref = run_picker_window(dialog, for_save, args.usage, args.game, settings.storage.poll_interval)
    else:
        from .ui.console_view import run_console_picker

        ref = run_console_picker(dialog, for_save, args.usage, args.game)
    if ref is None:
        print("cancelled")
        return 1
    print(ref.entry_key)
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else None)

    settings = Settings.load(user_path=args.settings_path)
    path = args.storage or settings.storage.resolve_path()
    try:
        dialog = SaveDialog(JsonFileStorage(path), settings)
        if args.command == "list":
            return _cmd_list(dialog, args)
        if args.command == "show":
            return _cmd_show(dialog, args)
        if args.command == "write":
            return _cmd_write(dialog, args)
        if args.command == "remove":
            return _cmd_remove(dialog, args)
        return _cmd_pick(dialog, args, settings)
    except SavePickerError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
