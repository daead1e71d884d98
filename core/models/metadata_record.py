"""
Metadata record dataclass for one cataloged video.
"""

import uuid
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


UNKNOWN = "Unknown"
MEDIA_EXTENSION = ".mp4"
INFO_SUFFIX = ".info.json"


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _count(value: Any) -> int:
    # bool is an int subclass; a true/false view count is garbage
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return 0


def _directory(save_dir) -> Path:
    return Path(save_dir).expanduser().absolute()


def media_path_for(save_dir, title: str, filename: Optional[str] = None) -> str:
    """
    Derive the expected media file path. Never checked on disk.

    yt-dlp sanitizes titles when naming files, so the stem of the filename
    it reports wins over the raw title.
    """
    stem = Path(filename).stem if filename else title
    return str(_directory(save_dir) / f"{stem}{MEDIA_EXTENSION}")


def make_record_id(source_path) -> str:
    """Deterministic record identity: the per-item metadata file it came from."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"file:{source_path}"))


def info_path_for(save_dir, info: Mapping[str, Any], media_path: str) -> Path:
    """
    Locate the per-item metadata file yt-dlp wrote for this info dict.

    Uses ``infojson_filename`` when present, else ``<media stem>.info.json``.
    Always resolved inside the save directory.
    """
    name = _text(info.get("infojson_filename"))
    if name:
        return _directory(save_dir) / Path(name).name
    return _directory(save_dir) / f"{Path(media_path).stem}{INFO_SUFFIX}"


@dataclass(frozen=True)
class MetadataRecord:
    """Represents a single downloaded video in the catalog."""

    title: str = UNKNOWN
    uploader: str = UNKNOWN
    channel: str = UNKNOWN
    views: int = 0
    file_path: str = ""
    video_id: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def from_info(cls, info: Mapping[str, Any], save_dir, source=None) -> "MetadataRecord":
        """
        Build a record from a downloader metadata document.

        Args:
            info: Parsed JSON object as written by yt-dlp (--write-info-json)
            save_dir: Directory the media file was saved into
            source: Path of the metadata file the info was read from; located
                from the info dict when omitted

        Missing or mistyped fields fall back to "Unknown" / 0.
        """
        title = _text(info.get("title")) or UNKNOWN
        uploader = _text(info.get("uploader")) or UNKNOWN
        channel = _text(info.get("uploader_id")) or _text(info.get("channel")) or UNKNOWN
        video_id = info.get("id")
        video_id = str(video_id) if isinstance(video_id, (str, int)) and not isinstance(video_id, bool) else ""
        filename = (
            _text(info.get("filepath"))
            or _text(info.get("_filename"))
            or _text(info.get("filename"))
        )
        file_path = media_path_for(save_dir, title, filename)

        if source is None:
            source = info_path_for(save_dir, info, file_path)
        else:
            source = Path(source).expanduser().absolute()

        return cls(
            title=title,
            uploader=uploader,
            channel=channel,
            views=_count(info.get("view_count")),
            file_path=file_path,
            video_id=video_id,
            id=make_record_id(source),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MetadataRecord":
        """Load a record from the consolidated catalog document."""
        known = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known}
        filtered["views"] = _count(filtered.get("views", 0))
        for key in ("title", "uploader", "channel"):
            if key in filtered:
                filtered[key] = _text(filtered[key]) or UNKNOWN
        if not _text(filtered.get("id")):
            filtered.pop("id", None)
        return cls(**filtered)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_info(self) -> Dict[str, Any]:
        """Render as a yt-dlp style metadata document."""
        info = {
            "title": self.title,
            "uploader": self.uploader,
            "uploader_id": self.channel,
            "view_count": self.views,
        }
        if self.video_id:
            info["id"] = self.video_id
        return info

    def media_exists(self) -> bool:
        return bool(self.file_path) and Path(self.file_path).is_file()

    def get_byline(self) -> str:
        return f"By: {self.uploader} ({self.channel})"

    def get_display_title(self, max_length: int = 60) -> str:
        """Get title for display, truncated if needed."""
        if len(self.title) > max_length:
            return self.title[:max_length - 3] + "..."
        return self.title
