"""
GUI managers.
"""

from .download_worker import DownloadWorker

__all__ = ["DownloadWorker"]
