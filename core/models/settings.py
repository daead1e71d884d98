"""
Application settings with persistence.
"""

import json
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional


SAVE_DIR_ENV = "VIDEO_CATALOG_DIR"


@dataclass
class AppSettings:
    """Application settings that persist between sessions."""

    save_folder: str = "~/Movies/YoutubeDownloads"
    format: str = "best"
    transcode: bool = True
    video_codec: str = "h264"
    audio_codec: str = "aac"
    transcode_suffix: str = "-qt"
    ffmpeg_binary: str = "ffmpeg"
    extra_bin_paths: List[str] = field(default_factory=lambda: ["/opt/homebrew/bin"])
    catalog_filename: str = "video_list.json"
    result_filename: str = "video_info.json"
    reload_delay: float = 2.0
    theme: str = "dark"

    _settings_file: str = field(default="settings.json", repr=False)

    @classmethod
    def load(cls, settings_path: Optional[str] = None) -> "AppSettings":
        """Load settings from JSON file."""
        path = Path(settings_path) if settings_path else Path("settings.json")

        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                # Filter out unknown keys and _settings_file
                valid_keys = {f.name for f in cls.__dataclass_fields__.values()
                             if not f.name.startswith("_")}
                filtered = {k: v for k, v in data.items() if k in valid_keys}
                settings = cls(**filtered)
                settings._settings_file = str(path)
                return settings
            except (json.JSONDecodeError, TypeError, AttributeError, OSError):
                pass

        settings = cls()
        settings._settings_file = str(path)
        return settings

    def save(self) -> None:
        """Save settings to JSON file."""
        path = Path(self._settings_file)
        data = {k: v for k, v in asdict(self).items() if not k.startswith("_")}

        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    @property
    def save_dir(self) -> Path:
        """Absolute save directory. VIDEO_CATALOG_DIR wins over the stored value."""
        folder = os.environ.get(SAVE_DIR_ENV) or self.save_folder
        return Path(folder).expanduser().absolute()
