"""
Fetch orchestration: one blocking yt-dlp run turned into a metadata record.
"""

import json
import subprocess
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .commands import CommandBuilder
from .errors import FetchFailed, InvalidInput, ProcessSpawnFailed
from .logger import get_logger
from .models.metadata_record import MetadataRecord
from .models.settings import AppSettings
from .runtime import ffmpeg_env


class FetchState(Enum):
    """State of the most recent fetch."""
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def read_result_file(path: Path) -> Optional[Dict[str, Any]]:
    """
    Parse the info JSON the download step appended to the result file.

    The file holds one JSON object per line; the last one describes the
    latest video. Returns None when the file is missing or unusable.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return None

    try:
        info = json.loads(lines[-1])
    except json.JSONDecodeError:
        return None

    return info if isinstance(info, dict) else None


class FetchOrchestrator:
    """Drives a single fetch-and-transcode run to completion."""

    def __init__(self, settings: AppSettings):
        self.settings = settings
        self.state = FetchState.IDLE
        self.last_output = ""
        self.log = get_logger()

    def build_command(self, url: str, save_dir: Optional[Path] = None) -> CommandBuilder:
        """Validate the URL and return the command builder for it."""
        url = (url or "").strip()
        if not url:
            raise InvalidInput("URL cannot be empty")
        return CommandBuilder(url, self.settings, save_dir)

    def fetch(self, url: str, save_dir: Optional[Path] = None) -> MetadataRecord:
        """
        Download, transcode and describe one video.

        Blocks until the external process exits.

        Raises:
            InvalidInput: URL is empty or whitespace
            ProcessSpawnFailed: yt-dlp could not be launched
            FetchFailed: non-zero exit or no usable result metadata
        """
        builder = self.build_command(url, save_dir)

        self.state = FetchState.RUNNING
        try:
            record = self._run(builder)
        except Exception:
            self.state = FetchState.FAILED
            raise
        self.state = FetchState.SUCCEEDED
        return record

    def _run(self, builder: CommandBuilder) -> MetadataRecord:
        save_dir = builder.save_dir
        result_path = builder.result_path

        try:
            save_dir.mkdir(parents=True, exist_ok=True)
            # The result file is appended to; a leftover from a previous run
            # would otherwise be read back as this run's video.
            result_path.unlink(missing_ok=True)
        except OSError as e:
            self.log.error(f"Cannot prepare {save_dir}: {e}")
            raise FetchFailed(f"Cannot prepare save directory: {e}") from e

        cmd = builder.build_ytdlp_command()
        self.log.info(f"Fetching: {builder.url[:80]}")
        self.log.debug(f"Full command: {builder.get_command_string()}")

        output_lines: List[str] = []
        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
                encoding="utf-8",
                errors="replace",
                env=ffmpeg_env(self.settings.extra_bin_paths),
            )
        except OSError as e:
            self.log.error(f"Could not launch yt-dlp: {e}")
            raise ProcessSpawnFailed(f"Could not launch yt-dlp: {e}") from e

        self.log.debug(f"Process started with PID: {process.pid}")
        for line in process.stdout:
            line = line.rstrip()
            if not line:
                continue
            output_lines.append(line)
            if "ERROR" in line or "error" in line.lower():
                self.log.error(f"yt-dlp: {line}")
            elif "WARNING" in line or "warning" in line.lower():
                self.log.warning(f"yt-dlp: {line}")

        process.wait()
        exit_code = process.returncode
        self.last_output = "\n".join(output_lines)
        self.log.info(f"Process exited with code: {exit_code}")

        if exit_code != 0:
            self.log.error("Fetch failed. Last 10 lines of output:")
            for line in output_lines[-10:]:
                self.log.error(f"  {line}")
            raise FetchFailed(
                f"yt-dlp exited with code {exit_code}",
                output=self.last_output,
                returncode=exit_code,
            )

        info = read_result_file(result_path)
        if info is None:
            self.log.error(f"No usable result metadata at {result_path}")
            raise FetchFailed(
                f"Result metadata missing or unreadable: {result_path.name}",
                output=self.last_output,
                returncode=exit_code,
            )

        record = MetadataRecord.from_info(info, save_dir)
        self.log.info(f"Fetched: {record.title}")
        return record
