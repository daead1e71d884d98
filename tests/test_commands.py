import os
import sys

from core.commands import CommandBuilder
from core.models.settings import AppSettings
from core.runtime import ffmpeg_env, ytdlp_cmd


def test_ytdlp_command_uses_fixed_template(settings, save_dir):
    cmd = CommandBuilder("https://youtu.be/abc", settings).build_ytdlp_command()

    assert cmd[:3] == ytdlp_cmd() == [sys.executable, "-m", "yt_dlp"]
    assert cmd[cmd.index("-f") + 1] == "best"
    assert cmd[cmd.index("--merge-output-format") + 1] == "mp4"
    assert "--write-info-json" in cmd
    assert cmd[cmd.index("-o") + 1] == f"{save_dir}/%(title)s.%(ext)s"
    i = cmd.index("--print-to-file")
    assert cmd[i + 1:i + 3] == ["after_move:%()j", str(save_dir / "video_info.json")]
    assert cmd[-2:] == ["--", "https://youtu.be/abc"]


def test_transcode_step_reencodes_beside_original(settings):
    cmd = CommandBuilder("u", settings).build_ytdlp_command()
    hook = cmd[cmd.index("--exec") + 1]

    assert hook.startswith("after_move:ffmpeg ")
    assert "-vcodec h264" in hook
    assert "-acodec aac" in hook
    assert "-movflags faststart" in hook
    assert hook.endswith("%(filepath.:-4)q-qt.mp4")


def test_transcode_can_be_disabled(settings):
    settings.transcode = False
    assert "--exec" not in CommandBuilder("u", settings).build_ytdlp_command()


def test_percent_in_save_dir_is_escaped(tmp_path):
    settings = AppSettings(save_folder=str(tmp_path / "100%"))
    cmd = CommandBuilder("u", settings).build_ytdlp_command()
    assert cmd[cmd.index("-o") + 1].startswith(str(tmp_path / "100%%"))


def test_explicit_save_dir_overrides_settings(settings, tmp_path):
    builder = CommandBuilder("u", settings, tmp_path / "other")
    assert builder.result_path == tmp_path / "other" / "video_info.json"


def test_command_string_is_shell_quoted(settings):
    text = CommandBuilder("https://x.test/watch?v=1&t=2", settings).get_command_string()
    assert text.endswith("-- 'https://x.test/watch?v=1&t=2'")


def test_ffmpeg_env_prepends_extra_paths(monkeypatch):
    monkeypatch.setenv("PATH", "/usr/bin")
    env = ffmpeg_env(["/opt/homebrew/bin"])
    assert env["PATH"] == os.pathsep.join(["/opt/homebrew/bin", "/usr/bin"])
    assert ffmpeg_env()["PATH"] == "/usr/bin"
