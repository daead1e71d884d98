"""
Catalog persistence and save-directory reconciliation.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..errors import CatalogError, ParseSkipped, PersistenceFailed
from ..logger import get_logger
from ..models.metadata_record import MetadataRecord


class CatalogStore:
    """
    Reads per-item metadata files and mirrors the catalog to one JSON file.

    The per-item ``*.json`` files written by yt-dlp are the source of
    truth; ``video_list.json`` is a cache rewritten after every change.
    Problems are logged and passed to ``on_error`` rather than raised, so a
    bad file or a read-only directory never aborts the caller.
    """

    def __init__(
        self,
        save_dir,
        catalog_filename: str = "video_list.json",
        result_filename: str = "video_info.json",
        on_error: Optional[Callable[[CatalogError], None]] = None,
    ):
        self.save_dir = Path(save_dir)
        self.catalog_filename = catalog_filename
        self.result_filename = result_filename
        self.on_error = on_error
        self.log = get_logger()

    @property
    def catalog_path(self) -> Path:
        return self.save_dir / self.catalog_filename

    def _report(self, error: CatalogError) -> None:
        if self.on_error:
            self.on_error(error)

    def _metadata_files(self) -> List[Path]:
        if not self.save_dir.is_dir():
            self.log.debug(f"Save directory does not exist yet: {self.save_dir}")
            return []
        own_files = {self.catalog_filename, self.result_filename}
        return sorted(
            p for p in self.save_dir.glob("*.json")
            if p.is_file() and p.name not in own_files
        )

    def scan_directory(self) -> List[MetadataRecord]:
        """Build one record per readable metadata file in the save directory."""
        records = []
        for path in self._metadata_files():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    info = json.load(f)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                self._skip(path, f"{type(e).__name__}: {e}")
                continue

            if not isinstance(info, dict):
                self._skip(path, f"expected a JSON object, got {type(info).__name__}")
                continue

            records.append(MetadataRecord.from_info(info, self.save_dir, source=path))

        self.log.info(f"Scanned {self.save_dir}: {len(records)} item(s)")
        return records

    def _skip(self, path: Path, reason: str) -> None:
        self.log.warning(f"Skipping {path.name}: {reason}")
        self._report(ParseSkipped(f"{path.name}: {reason}", path=str(path)))

    def persist(self, records: Iterable[MetadataRecord]) -> bool:
        """
        Rewrite the consolidated catalog file.

        Written to a temp file in the same directory and renamed over the
        old one, so readers see either the previous or the new list.

        Returns:
            True on success, False if the write failed (already reported)
        """
        data = [record.to_dict() for record in records]
        tmp_path = None
        try:
            self.save_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.save_dir, prefix=f".{self.catalog_filename}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.catalog_path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            self.log.error(f"Could not write {self.catalog_path}: {e}")
            self._report(PersistenceFailed(
                f"Could not write {self.catalog_filename}: {e}",
                path=str(self.catalog_path),
            ))
            return False

        self.log.debug(f"Persisted {len(data)} record(s) to {self.catalog_path}")
        return True

    def load(self) -> List[MetadataRecord]:
        """Scan the save directory and rewrite the consolidated file from it."""
        records = self.scan_directory()
        self.persist(records)
        return records

    def read_catalog(self) -> List[MetadataRecord]:
        """
        Read the consolidated catalog file as last persisted.

        Raises:
            PersistenceFailed: the file exists but cannot be read or parsed
        """
        path = self.catalog_path
        if not path.exists():
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceFailed(f"Could not read {path.name}: {e}", path=str(path)) from e

        if not isinstance(data, list):
            raise PersistenceFailed(f"{path.name} does not hold a list", path=str(path))

        return [MetadataRecord.from_dict(item) for item in data if isinstance(item, dict)]
