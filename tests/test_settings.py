import json
from pathlib import Path

from core.models.settings import SAVE_DIR_ENV, AppSettings


def test_defaults_when_file_missing(tmp_path):
    settings = AppSettings.load(str(tmp_path / "settings.json"))

    assert settings.save_folder == "~/Movies/YoutubeDownloads"
    assert settings.catalog_filename == "video_list.json"
    assert settings.extra_bin_paths == ["/opt/homebrew/bin"]
    assert settings.save_dir == Path.home() / "Movies" / "YoutubeDownloads"


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    settings = AppSettings.load(str(path))
    settings.save_folder = str(tmp_path / "videos")
    settings.reload_delay = 5.0
    settings.save()

    loaded = AppSettings.load(str(path))
    assert loaded.save_folder == str(tmp_path / "videos")
    assert loaded.reload_delay == 5.0
    assert "_settings_file" not in json.loads(path.read_text())


def test_unknown_keys_ignored_and_corrupt_file_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"format": "worst", "browser": "chrome"}))
    assert AppSettings.load(str(path)).format == "worst"

    path.write_text("{broken")
    assert AppSettings.load(str(path)).format == "best"

    path.write_text("[]")
    assert AppSettings.load(str(path)).format == "best"


def test_environment_overrides_save_folder(tmp_path, monkeypatch):
    settings = AppSettings(save_folder=str(tmp_path / "a"))
    monkeypatch.setenv(SAVE_DIR_ENV, str(tmp_path / "b"))
    assert settings.save_dir == tmp_path / "b"
