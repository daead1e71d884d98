"""
Command construction for the fetch-and-transcode pipeline.
"""

import shlex
from pathlib import Path
from typing import List, Optional

from .models.settings import AppSettings
from .runtime import ytdlp_cmd


def _escape_template(text: str) -> str:
    """Escape literal text for use inside a yt-dlp output template."""
    return text.replace("%", "%%")


class CommandBuilder:
    """Build the yt-dlp command that downloads, writes metadata and transcodes."""

    def __init__(self, url: str, settings: AppSettings, save_dir: Optional[Path] = None):
        self.url = url
        self.settings = settings
        self.save_dir = Path(save_dir) if save_dir else settings.save_dir

    @property
    def result_path(self) -> Path:
        """Well-known file the download step appends the final info JSON to."""
        return self.save_dir / self.settings.result_filename

    def build_transcode_command(self) -> str:
        """ffmpeg invocation for yt-dlp's --exec hook.

        ``%(filepath)q`` is the final media path after remux;
        ``%(filepath.:-4)q`` strips its ``.mp4`` so the re-encoded copy
        lands beside it as ``<title><suffix>.mp4``.
        """
        s = self.settings
        return " ".join([
            shlex.quote(s.ffmpeg_binary),
            "-y", "-loglevel", "error",
            "-i", "%(filepath)q",
            "-vcodec", shlex.quote(s.video_codec),
            "-acodec", shlex.quote(s.audio_codec),
            "-strict", "-2",
            "-movflags", "faststart",
            "%(filepath.:-4)q" + shlex.quote(f"{s.transcode_suffix}.mp4"),
        ])

    def build_ytdlp_command(self) -> List[str]:
        """Build yt-dlp command with the fixed download template."""
        out_dir = _escape_template(str(self.save_dir))

        cmd = [
            *ytdlp_cmd(),
            "--no-playlist",
            "--newline",
            "-f", self.settings.format,
            "--merge-output-format", "mp4",
            "--remux-video", "mp4",
            "--write-info-json",
            "-o", f"{out_dir}/%(title)s.%(ext)s",
            "--print-to-file", "after_move:%()j", _escape_template(str(self.result_path)),
        ]

        if self.settings.transcode:
            cmd.extend(["--exec", "after_move:" + self.build_transcode_command()])

        # "--" so a URL starting with "-" is never read as an option
        cmd.extend(["--", self.url])

        return cmd

    def get_command_string(self) -> str:
        """Get the full command as a shell-quoted string (for display/debugging)."""
        return " ".join(shlex.quote(arg) for arg in self.build_ytdlp_command())
