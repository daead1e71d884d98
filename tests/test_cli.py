import json

import pytest
from click.testing import CliRunner

import video_catalog
from video_catalog import cli

from conftest import write_info


@pytest.fixture
def run(tmp_path, save_dir, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    base = [
        "--save-dir", str(save_dir),
        "--settings", str(tmp_path / "settings.json"),
        "--log-file", str(tmp_path / "cli.log"),
    ]

    def invoke(*args):
        return runner.invoke(cli, base + list(args))

    return invoke


def test_list_rescan_shows_entries(run, save_dir):
    write_info(save_dir, "Alpha", uploader="Someone")

    result = run("list", "--rescan")

    assert result.exit_code == 0, result.output
    assert "Alpha" in result.output
    assert "Someone" in result.output


def test_list_empty(run):
    result = run("list")
    assert result.exit_code == 0
    assert "Catalog is empty" in result.output


def test_download_blank_url_fails(run, fake_ytdlp):
    result = run("download", "   ")

    assert result.exit_code == 1
    assert "URL cannot be empty" in result.output
    assert fake_ytdlp.calls == []


def test_download_success(run, fake_ytdlp, save_dir):
    fake_ytdlp.info = {"id": "abc", "title": "Alpha", "uploader": "u1", "uploader_id": "c1", "view_count": 7}

    result = run("download", "https://youtu.be/abc")

    assert result.exit_code == 0, result.output
    assert "Downloaded" in result.output
    data = json.loads((save_dir / "video_list.json").read_text())
    assert [item["title"] for item in data] == ["Alpha"]


def test_download_exits_nonzero_when_catalog_cannot_be_saved(run, fake_ytdlp, tmp_path):
    fake_ytdlp.info = {"id": "abc", "title": "Alpha", "uploader": "u1", "uploader_id": "c1", "view_count": 7}
    (tmp_path / "settings.json").write_text(json.dumps({"catalog_filename": "missing/video_list.json"}))

    result = run("download", "https://youtu.be/abc")

    assert result.exit_code == 1
    assert "Downloaded" in result.output
    assert "video_list.json" in result.output


def test_download_failure_exits_nonzero(run, fake_ytdlp, save_dir):
    fake_ytdlp.returncode = 2
    fake_ytdlp.output = ["ERROR: Unsupported URL"]

    result = run("download", "https://example.invalid/x")

    assert result.exit_code == 1
    assert "Unsupported URL" in result.output
    assert not (save_dir / "video_list.json").exists()


def test_download_dry_run_prints_command(run, fake_ytdlp):
    result = run("download", "--dry-run", "https://youtu.be/abc")

    assert result.exit_code == 0
    assert "yt_dlp" in result.output
    assert fake_ytdlp.calls == []


def test_remove_then_list(run, save_dir):
    for title in ("Alpha", "Beta", "Gamma"):
        write_info(save_dir, title)
    run("reload")

    result = run("remove", "2")
    assert result.exit_code == 0, result.output
    assert "Beta" in result.output

    listed = run("list")
    assert "2 video(s)" in listed.output
    assert "Beta" not in listed.output
    assert (save_dir / "Beta.info.json").exists()


def test_remove_out_of_range_fails(run, save_dir):
    write_info(save_dir, "Alpha")
    result = run("remove", "3")
    assert result.exit_code == 1
    assert "out of range" in result.output


def test_reload_reports_skipped_files(run, save_dir):
    write_info(save_dir, "Alpha")
    (save_dir / "bad.json").write_text("{")

    result = run("reload")

    assert result.exit_code == 0
    assert "1 video(s)" in result.output
    assert "bad.json" in result.output


def test_open_launches_media_file(run, save_dir, monkeypatch):
    opened = []
    monkeypatch.setattr(video_catalog, "open_path", opened.append)
    write_info(save_dir, "Alpha")
    (save_dir / "Alpha.mp4").write_bytes(b"")

    result = run("open", "1")

    assert result.exit_code == 0, result.output
    assert opened == [str(save_dir / "Alpha.mp4")]


def test_open_missing_media_fails(run, save_dir):
    write_info(save_dir, "Alpha")
    result = run("open", "1")
    assert result.exit_code == 1
