"""
Logging configuration for the catalog.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .runtime import is_frozen


LOGGER_NAME = "video_catalog"


def _default_log_path() -> str:
    """Return a writable path for the log file.

    When frozen, CWD may be / (read-only), so use ~/Library/Logs/.
    """
    if is_frozen() and sys.platform == "darwin":
        log_dir = Path.home() / "Library" / "Logs" / "Video Catalog"
        log_dir.mkdir(parents=True, exist_ok=True)
        return str(log_dir / "video_catalog.log")
    return "video_catalog.log"


def setup_logging(log_file: Optional[str] = None, console: bool = True) -> logging.Logger:
    """
    Set up logging to a file and, optionally, the console.

    The CLI passes console=False and prints its own output with rich.
    Returns the configured logger.
    """
    global _logger

    if log_file is None:
        log_file = _default_log_path()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Clear any existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # File handler - detailed logging
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

    logger.info(f"=== Video Catalog started at {datetime.now().isoformat()} ===")

    _logger = logger
    return logger


# Global logger instance
_logger = None


def get_logger() -> logging.Logger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger


def get_log_path() -> Optional[str]:
    """Path of the active log file, if logging has been set up."""
    if _logger is None:
        return None
    for handler in _logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None
