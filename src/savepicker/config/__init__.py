from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Iterator, Mapping, Optional, Tuple

import yaml

from ..paths import default_storage_path

logger = logging.getLogger(__name__)

STORAGE_PATH_ENV = "SAVEPICKER_STORAGE_PATH"
DEFAULTS_RESOURCE = "default_settings.yaml"


@dataclass
class CaptionSettings:
    save_prompt: str = "Name this save file."
    load_prompt: str = "Select a saved game to load."
    load_empty: str = "You have no save files for this game."
    replace_prompt: str = 'You already have a save file "{filename}". Do you want to replace it?'


@dataclass
class LabelSettings:
    save: str = "Save"
    load: str = "Load"
    replace: str = "Replace"
    cancel: str = "Cancel"


@dataclass
class ListingSettings:
    label_template: str = "{filename} -- {date}"
    missing_date: str = "???"
    newest_first: bool = True


@dataclass
class StorageSettings:
    path: Optional[str] = None
    poll_interval: float = 1.0

    def resolve_path(self) -> Path:
        return Path(self.path).expanduser() if self.path else default_storage_path()


def _read_yaml(source) -> dict:
    """Read a YAML mapping from a path or package resource; anything else counts as empty."""
    with source.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def _overlay(target: dict, layer: Mapping) -> None:
    # Nested sections merge key by key; scalars and lists replace.
    for key, value in layer.items():
        if isinstance(value, Mapping):
            if not isinstance(target.get(key), dict):
                target[key] = {}
            _overlay(target[key], value)
        else:
            target[key] = value


@dataclass
class Settings:
    """Picker wording, listing format and storage location.

    Layers are applied in order: the packaged ``default_settings.yaml``, an
    optional user file, then ``SAVEPICKER_STORAGE_PATH``. Unknown keys are
    dropped and missing keys keep the dataclass defaults.
    """

    captions: CaptionSettings = field(default_factory=CaptionSettings)
    labels: LabelSettings = field(default_factory=LabelSettings)
    listing: ListingSettings = field(default_factory=ListingSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)

    @staticmethod
    def _section(section_cls, data: Optional[dict]):
        allowed = {f.name for f in dataclasses.fields(section_cls)}
        return section_cls(**{k: v for k, v in (data or {}).items() if k in allowed})

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        return Settings(
            captions=cls._section(CaptionSettings, data.get("captions")),
            labels=cls._section(LabelSettings, data.get("labels")),
            listing=cls._section(ListingSettings, data.get("listing")),
            storage=cls._section(StorageSettings, data.get("storage")),
        )

    @staticmethod
    def _layers(user_path: Optional[Path], env: Mapping[str, str]) -> Iterator[Tuple[str, dict]]:
        packaged = resources.files(__name__).joinpath(DEFAULTS_RESOURCE)
        if packaged.is_file():
            yield "packaged", _read_yaml(packaged)
        else:
            logger.warning("Packaged %s is missing; using built-in defaults", DEFAULTS_RESOURCE)

        if user_path is not None:
            if user_path.exists():
                logger.info("Loaded user settings from %s", user_path)
                yield "user", _read_yaml(user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        if env.get(STORAGE_PATH_ENV):
            yield "environment", {"storage": {"path": env[STORAGE_PATH_ENV]}}

    @classmethod
    def load(
        cls,
        user_path: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        merged: dict = {}
        for name, layer in cls._layers(user_path, os.environ if env is None else env):
            logger.debug("Applying %s settings layer", name)
            _overlay(merged, layer)
        settings = cls._from_dict(merged)
        logger.debug("Settings resolved: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)


__all__ = [
    "CaptionSettings",
    "LabelSettings",
    "ListingSettings",
    "Settings",
    "StorageSettings",
    "STORAGE_PATH_ENV",
]
