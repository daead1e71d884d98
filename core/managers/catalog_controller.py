"""
Catalog state management and operation mediation.
"""

import threading
import weakref
from typing import Iterable, List, Optional, Tuple

from ..downloader import FetchOrchestrator
from ..errors import CatalogError, FetchInProgress, ParseSkipped, PersistenceFailed
from ..logger import get_logger
from ..models.metadata_record import MetadataRecord
from ..models.settings import AppSettings
from .catalog_store import CatalogStore
from .event_processor import CATALOG_ID, EventProcessor, EventType


def _deferred_reload(controller_ref: "weakref.ref[CatalogController]") -> None:
    """Timer body. Holds only a weak reference so a torn-down controller is skipped."""
    controller = controller_ref()
    if controller is None or controller.closed:
        return
    controller.reload()


class CatalogController:
    """
    Owns the in-memory catalog and mediates download, remove and reload.

    All mutations go through one lock. Only one download may be in flight
    at a time since every run writes the same result file.
    """

    def __init__(
        self,
        settings: AppSettings,
        events: Optional[EventProcessor] = None,
        store: Optional[CatalogStore] = None,
        fetcher: Optional[FetchOrchestrator] = None,
    ):
        self.settings = settings
        self.events = events or EventProcessor()
        self.log = get_logger()

        self.store = store or CatalogStore(
            settings.save_dir,
            catalog_filename=settings.catalog_filename,
            result_filename=settings.result_filename,
        )
        self.store.on_error = self._on_store_error
        self.fetcher = fetcher or FetchOrchestrator(settings)

        self._records: List[MetadataRecord] = []
        self._lock = threading.RLock()
        self._fetch_lock = threading.Lock()
        self._reload_timer: Optional[threading.Timer] = None
        self.closed = False

    @property
    def records(self) -> Tuple[MetadataRecord, ...]:
        """Snapshot of the catalog in display order."""
        with self._lock:
            return tuple(self._records)

    def is_downloading(self) -> bool:
        return self._fetch_lock.locked()

    def request_download(self, url: str, schedule_reload: bool = True) -> MetadataRecord:
        """
        Fetch a URL and add the resulting record to the catalog.

        Raises:
            FetchInProgress: another download is running
            InvalidInput, ProcessSpawnFailed, FetchFailed: from the fetch;
                the catalog is left unchanged
        """
        if not self._fetch_lock.acquire(blocking=False):
            raise FetchInProgress("A download is already in progress")

        try:
            self.events.push(EventType.DOWNLOAD_STARTED, CATALOG_ID, url)
            try:
                record = self.fetcher.fetch(url, self.store.save_dir)
            except CatalogError as e:
                self.log.error(f"Download failed: {e}")
                self.events.push(EventType.DOWNLOAD_ERROR, CATALOG_ID, e)
                raise

            with self._lock:
                self._upsert(record)
                self.store.persist(self._records)
                self._notify_changed()
            self.events.push(EventType.DOWNLOAD_COMPLETE, record.id, record)
        finally:
            self._fetch_lock.release()

        if schedule_reload:
            self._schedule_reload()
        return record

    def _upsert(self, record: MetadataRecord) -> None:
        for i, existing in enumerate(self._records):
            if existing.id == record.id:
                self._records[i] = record
                return
        self._records.append(record)

    def reload(self) -> List[MetadataRecord]:
        """Rebuild the catalog from the per-item metadata files."""
        with self._lock:
            self._records.clear()
            self._records.extend(self.store.load())
            self._notify_changed()
            return list(self._records)

    def load_cached(self) -> List[MetadataRecord]:
        """
        Show the catalog as last persisted.

        Falls back to a full reload when no consolidated file exists yet.
        """
        with self._lock:
            if not self.store.catalog_path.exists():
                return self.reload()
            records = self.store.read_catalog()
            self._records[:] = records
            self._notify_changed()
            return list(self._records)

    def remove(self, indices: Iterable[int]) -> List[MetadataRecord]:
        """
        Drop records at the given 0-based positions and persist.

        Files on disk are left alone. Returns the removed records.

        Raises:
            IndexError: a position is out of range (nothing is removed)
        """
        with self._lock:
            positions = sorted(set(indices), reverse=True)
            for pos in positions:
                if not 0 <= pos < len(self._records):
                    raise IndexError(f"No catalog entry at position {pos}")

            removed = [self._records.pop(pos) for pos in positions]
            removed.reverse()
            for record in removed:
                self.log.info(f"Removed from catalog: {record.title}")

            self.store.persist(self._records)
            self._notify_changed()
            return removed

    def close(self) -> None:
        """Cancel a pending deferred reload."""
        self.closed = True
        timer = self._reload_timer
        if timer is not None:
            timer.cancel()
            self._reload_timer = None

    def _schedule_reload(self) -> None:
        """Reload after a short delay so trailing writes from the tools settle."""
        if self.closed:
            return
        if self._reload_timer is not None:
            self._reload_timer.cancel()
        timer = threading.Timer(
            self.settings.reload_delay, _deferred_reload, args=(weakref.ref(self),)
        )
        timer.daemon = True
        self._reload_timer = timer
        timer.start()

    def _notify_changed(self) -> None:
        self.events.push(EventType.CATALOG_CHANGED, CATALOG_ID, tuple(self._records))

    def _on_store_error(self, error: CatalogError) -> None:
        if isinstance(error, ParseSkipped):
            self.events.push(EventType.PARSE_SKIPPED, CATALOG_ID, error)
        elif isinstance(error, PersistenceFailed):
            self.events.push(EventType.PERSIST_FAILED, CATALOG_ID, error)
