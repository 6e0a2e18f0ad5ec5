from pathlib import Path

from savepicker.config import STORAGE_PATH_ENV, Settings
from savepicker.paths import default_storage_path


def test_defaults_from_packaged_yaml():
    settings = Settings.load(env={})
    assert settings.captions.save_prompt == "Name this save file."
    assert settings.captions.load_empty == "You have no save files for this game."
    assert settings.labels.replace == "Replace"
    assert settings.listing.newest_first is True
    assert settings.storage.resolve_path() == default_storage_path()


def test_user_file_overrides_defaults(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text(
        "labels:\n  save: Keep\nlisting:\n  newest_first: false\nunknown_section:\n  x: 1\n",
        encoding="utf-8",
    )
    settings = Settings.load(user_path=user, env={})
    assert settings.labels.save == "Keep"
    assert settings.labels.load == "Load"
    assert settings.listing.newest_first is False


def test_missing_user_file_keeps_defaults(tmp_path: Path):
    settings = Settings.load(user_path=tmp_path / "absent.yaml", env={})
    assert settings.labels.save == "Save"


def test_env_storage_path(tmp_path: Path):
    target = tmp_path / "store.json"
    settings = Settings.load(env={STORAGE_PATH_ENV: str(target)})
    assert settings.storage.resolve_path() == target


def test_save_round_trip(tmp_path: Path):
    settings = Settings()
    settings.captions.load_prompt = "Choose one"
    settings.storage.poll_interval = 0.25
    path = tmp_path / "nested" / "settings.yaml"
    settings.save(path)

    loaded = Settings.load(user_path=path, env={})
    assert loaded.captions.load_prompt == "Choose one"
    assert loaded.storage.poll_interval == 0.25


def test_default_storage_lives_in_user_data_dir():
    from platformdirs import user_data_dir

    path = default_storage_path()
    assert path.name == "storage.json"
    assert path.parent == Path(user_data_dir("savepicker", appauthor=False))


def test_env_beats_user_file(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text(f"storage:\n  path: {tmp_path / 'user.json'}\n  poll_interval: 2\n", encoding="utf-8")
    settings = Settings.load(user_path=user, env={STORAGE_PATH_ENV: str(tmp_path / "env.json")})
    assert settings.storage.resolve_path() == tmp_path / "env.json"
    assert settings.storage.poll_interval == 2


def test_non_mapping_user_file_is_ignored(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text("- just\n- a list\n", encoding="utf-8")
    settings = Settings.load(user_path=user, env={})
    assert settings.labels.cancel == "Cancel"
