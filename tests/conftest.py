import json
import queue
from pathlib import Path

import pytest

from core.logger import setup_logging
from core.managers.catalog_controller import CatalogController
from core.managers.event_processor import EventProcessor
from core.models.settings import SAVE_DIR_ENV, AppSettings


@pytest.fixture(autouse=True, scope="session")
def _logging(tmp_path_factory):
    setup_logging(str(tmp_path_factory.mktemp("logs") / "test.log"), console=False)


@pytest.fixture(autouse=True)
def _no_env_save_dir(monkeypatch):
    monkeypatch.delenv(SAVE_DIR_ENV, raising=False)


@pytest.fixture
def save_dir(tmp_path):
    path = tmp_path / "videos"
    path.mkdir()
    return path


@pytest.fixture
def settings(save_dir, tmp_path):
    s = AppSettings(save_folder=str(save_dir), reload_delay=0.05)
    s._settings_file = str(tmp_path / "settings.json")
    return s


@pytest.fixture
def events():
    return EventProcessor()


@pytest.fixture
def controller(settings, events):
    c = CatalogController(settings, events)
    yield c
    c.close()


def write_info(directory: Path, title: str, uploader="u1", channel="c1", views=42, **extra) -> Path:
    """Write a per-item metadata file the way yt-dlp names it."""
    info = {"title": title, "uploader": uploader, "uploader_id": channel, "view_count": views}
    info.update(extra)
    path = directory / f"{title}.info.json"
    path.write_text(json.dumps(info), encoding="utf-8")
    return path


def drain(events: EventProcessor):
    """Collect every pending event without dispatching to handlers."""
    collected = []
    while True:
        try:
            collected.append(events._queue.get_nowait())
        except queue.Empty:
            return collected


class FakeProcess:
    def __init__(self, lines, returncode):
        self.stdout = iter(line + "\n" for line in lines)
        self.returncode = None
        self._exit = returncode
        self.pid = 4242

    def wait(self):
        self.returncode = self._exit
        return self.returncode


class FakeYtDlp:
    """
    Replaces subprocess.Popen for the downloader.

    On each call it writes what a real run would: the per-item info file
    and one JSON line in the result file (when ``info`` is set).
    """

    def __init__(self):
        self.calls = []
        self.info = None
        self.returncode = 0
        self.output = ["[youtube] abc: Downloading webpage", "[download] 100% of 1.00MiB"]
        self.spawn_error = None

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        if self.spawn_error:
            raise self.spawn_error

        if self.info is not None:
            out_dir = Path(cmd[cmd.index("-o") + 1]).parent
            result_path = Path(cmd[cmd.index("--print-to-file") + 2])
            info_path = write_info(
                out_dir,
                self.info["title"],
                uploader=self.info.get("uploader"),
                channel=self.info.get("uploader_id"),
                views=self.info.get("view_count"),
                id=self.info.get("id"),
            )
            result = dict(self.info)
            result.setdefault("filepath", str(out_dir / f"{self.info['title']}.mp4"))
            result.setdefault("infojson_filename", str(info_path))
            with open(result_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(result) + "\n")

        return FakeProcess(self.output, self.returncode)


@pytest.fixture
def fake_ytdlp(monkeypatch):
    fake = FakeYtDlp()
    monkeypatch.setattr("core.downloader.subprocess.Popen", fake)
    return fake
