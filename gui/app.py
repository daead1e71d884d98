"""
Main application window for the Video Catalog GUI.
"""

import customtkinter as ctk
from typing import Optional

from core.errors import InvalidInput
from core.logger import get_logger
from core.managers.catalog_controller import CatalogController
from core.managers.event_processor import CatalogEvent, EventProcessor, EventType
from core.models.metadata_record import MetadataRecord
from core.models.settings import AppSettings
from core.runtime import open_path
from .managers.download_worker import DownloadWorker
from .widgets.url_input import URLInput
from .widgets.catalog_list import CatalogList
from .widgets.log_viewer import LogViewer


class MainWindow(ctk.CTk):
    """
    Main application window.
    """

    def __init__(self):
        super().__init__()

        # Initialize logging first
        self.log = get_logger()
        self.log.info("MainWindow initializing")

        self.settings = AppSettings.load()
        self.log.info(f"Settings loaded: save_dir={self.settings.save_dir}")

        # Set up window
        self.title("Video Catalog")
        self.geometry("760x600")
        self.minsize(560, 400)

        ctk.set_appearance_mode(self.settings.theme)
        ctk.set_default_color_theme("blue")

        # Initialize controller and subscribe to its changes
        self.events = EventProcessor()
        self.controller = CatalogController(self.settings, self.events)
        self.events.register_handler(EventType.CATALOG_CHANGED, self._on_catalog_changed)
        self.events.register_handler(EventType.DOWNLOAD_STARTED, self._on_download_started)
        self.events.register_handler(EventType.DOWNLOAD_COMPLETE, self._on_download_complete)
        self.events.register_handler(EventType.DOWNLOAD_ERROR, self._on_download_error)
        self.events.register_handler(EventType.PARSE_SKIPPED, self._on_store_warning)
        self.events.register_handler(EventType.PERSIST_FAILED, self._on_store_warning)

        self._worker: Optional[DownloadWorker] = None
        self._log_viewer: Optional[LogViewer] = None

        self._setup_ui()

        self.controller.reload()

        # Start event polling
        self._poll_events()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self.log.info("MainWindow initialization complete")

    def _setup_ui(self) -> None:
        """Set up the main UI layout."""
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self.url_input = URLInput(self, on_url_submit=self._on_download)
        self.url_input.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 8))

        list_frame = ctk.CTkFrame(self)
        list_frame.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 8))
        list_frame.grid_columnconfigure(0, weight=1)
        list_frame.grid_rowconfigure(1, weight=1)

        list_label = ctk.CTkLabel(
            list_frame,
            text="Downloaded videos:",
            font=ctk.CTkFont(size=12, weight="bold"),
        )
        list_label.grid(row=0, column=0, sticky="w", padx=8, pady=(8, 4))

        self.catalog_list = CatalogList(
            list_frame,
            on_item_open=self._on_item_open,
            on_item_remove=self._on_item_remove,
        )
        self.catalog_list.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))

        controls_frame = ctk.CTkFrame(list_frame, fg_color="transparent")
        controls_frame.grid(row=2, column=0, sticky="ew", padx=8, pady=(0, 8))

        self.reload_button = ctk.CTkButton(
            controls_frame,
            text="Reload",
            width=80,
            command=self._on_reload,
            fg_color="gray40",
            hover_color="gray50",
        )
        self.reload_button.pack(side="left", padx=(0, 4))

        self.log_button = ctk.CTkButton(
            controls_frame,
            text="View Log",
            width=80,
            fg_color="gray40",
            hover_color="gray50",
            command=self._on_view_log,
        )
        self.log_button.pack(side="right")

        self.status_bar = ctk.CTkLabel(
            self,
            text="Ready",
            anchor="w",
            font=ctk.CTkFont(size=11),
            text_color="gray60",
        )
        self.status_bar.grid(row=2, column=0, sticky="ew", padx=12, pady=(0, 8))

    def _poll_events(self) -> None:
        """Poll for catalog events from worker and timer threads."""
        self.events.process_pending()
        self.after(100, self._poll_events)  # Poll every 100ms

    def _on_download(self, url: str) -> None:
        """Handle Download button click."""
        if self._worker and self._worker.is_running():
            self._show_error("A download is already in progress")
            return
        try:
            # Fail fast on blank input without spinning up a thread
            self.controller.fetcher.build_command(url)
        except InvalidInput as e:
            self._show_error(str(e))
            return

        self._worker = DownloadWorker(self.controller, url)
        self._worker.start()

    def _on_download_started(self, event: CatalogEvent) -> None:
        self.url_input.set_enabled(False)
        self._set_status(f"Downloading {str(event.data).strip()[:60]}...")

    def _on_download_complete(self, event: CatalogEvent) -> None:
        record: MetadataRecord = event.data
        self.url_input.set_enabled(True)
        self.url_input.clear()
        self._set_status(f"Downloaded: {record.get_display_title(60)}")

    def _on_download_error(self, event: CatalogEvent) -> None:
        self.url_input.set_enabled(True)
        self._show_error(f"Download failed: {event.data}")

    def _on_store_warning(self, event: CatalogEvent) -> None:
        self._show_error(str(event.data))

    def _on_catalog_changed(self, event: CatalogEvent) -> None:
        records = event.data
        self.catalog_list.set_records(records)
        if not (self._worker and self._worker.is_running()):
            self._set_status(f"{len(records)} video(s) in catalog")

    def _on_item_open(self, record: MetadataRecord) -> None:
        self.log.info(f"Opening: {record.file_path}")
        try:
            open_path(record.file_path)
        except OSError as e:
            self.log.error(f"Could not open {record.file_path}: {e}")
            self._show_error(f"Could not open file: {e}")

    def _on_item_remove(self, index: int) -> None:
        self.log.info(f"Removing catalog entry at position {index}")
        try:
            self.controller.remove([index])
        except IndexError as e:
            # Catalog changed underneath the list; the pending event redraws it
            self.log.warning(f"Stale remove request: {e}")

    def _on_reload(self) -> None:
        self.log.info("Reload button clicked")
        self.controller.reload()

    def _on_view_log(self) -> None:
        """Handle View Log button click."""
        if self._log_viewer is None or not self._log_viewer.winfo_exists():
            self._log_viewer = LogViewer(self)
        else:
            self._log_viewer.focus()
            self._log_viewer.load_log()

    def _set_status(self, message: str) -> None:
        self.status_bar.configure(text=message, text_color="gray60")

    def _show_error(self, message: str) -> None:
        """Show an error message."""
        self.status_bar.configure(text=f"Error: {message}", text_color="#ff6666")
        self.after(3000, lambda: self.status_bar.configure(text_color="gray60"))

    def _on_close(self) -> None:
        """Handle window close."""
        self.log.info("Window closing")
        self.controller.close()
        self.log.info("Application shutdown complete")
        self.destroy()
