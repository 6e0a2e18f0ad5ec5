from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "savepicker"
STORAGE_FILE_NAME = "storage.json"


def app_dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=False)


def default_storage_path() -> Path:
    """The JSON store used when neither settings nor the CLI name one."""
    return Path(app_dirs().user_data_dir) / STORAGE_FILE_NAME
