"""
Threaded download worker for the GUI.
"""

import threading
import traceback
from typing import Optional

from core.errors import CatalogError
from core.logger import get_logger
from core.managers.catalog_controller import CatalogController


class DownloadWorker:
    """
    Runs one blocking request_download() off the Tk main loop.

    Results reach the window through the controller's event queue.
    """

    def __init__(self, controller: CatalogController, url: str):
        self.controller = controller
        self.url = url
        self.log = get_logger()

        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start the download in a background thread."""
        if self._thread and self._thread.is_alive():
            self.log.warning("Worker already running, ignoring start request")
            return

        self.log.info(f"Starting download worker for: {self.url[:80]}")
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def is_running(self) -> bool:
        """Check if the worker is currently running."""
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        """Main worker thread function."""
        try:
            self.controller.request_download(self.url)
        except CatalogError:
            # Already logged and pushed as DOWNLOAD_ERROR by the controller
            pass
        except Exception as e:
            self.log.error(f"Exception in worker: {type(e).__name__}: {e}")
            self.log.debug(f"Traceback:\n{traceback.format_exc()}")
