"""
Runtime helpers for PyInstaller frozen builds and host integration.
"""

import os
import subprocess
import sys
from typing import Iterable, List, Optional


def is_frozen() -> bool:
    """Check if running as a PyInstaller-frozen app."""
    return getattr(sys, "frozen", False)


def _bundle_bin_dir() -> str:
    """Return the directory containing bundled binaries inside the .app."""
    # PyInstaller sets _MEIPASS to the temp extraction dir (onefile) or
    # the app's Resources dir (onedir / .app bundle).
    return getattr(sys, "_MEIPASS", os.path.dirname(sys.executable))


def ytdlp_cmd() -> List[str]:
    """Return the command prefix to invoke yt-dlp.

    When frozen, uses the bundled yt-dlp binary shipped inside the .app.
    When running from source, uses ``python -m yt_dlp``.
    """
    if is_frozen():
        return [os.path.join(_bundle_bin_dir(), "yt-dlp")]
    return [sys.executable, "-m", "yt_dlp"]


def ffmpeg_env(extra_paths: Optional[Iterable[str]] = None) -> dict:
    """Return an env dict that puts ffmpeg on PATH for yt-dlp's --exec step.

    ``extra_paths`` (e.g. Homebrew's bin directory, which GUI-launched apps
    on macOS do not inherit) are prepended to PATH. When frozen, the bundle
    directory is prepended as well and PyInstaller-internal variables are
    stripped so the bundled yt-dlp (itself a PyInstaller binary) boots
    cleanly.
    """
    env = os.environ.copy()
    prefix = [p for p in (extra_paths or []) if p]
    if is_frozen():
        prefix.insert(0, _bundle_bin_dir())
        # Remove PyInstaller env vars that confuse child PyInstaller binaries
        for key in list(env.keys()):
            if key.startswith(("_MEIPASS", "_PYI", "__PYINSTALLER")):
                del env[key]
        for key in ("DYLD_LIBRARY_PATH", "DYLD_FRAMEWORK_PATH"):
            env.pop(key, None)
    if prefix:
        env["PATH"] = os.pathsep.join(prefix + [env.get("PATH", "")])
    return env


def open_path(path: str) -> None:
    """Open a file with the platform's default application."""
    if sys.platform == "darwin":
        subprocess.Popen(["open", path])
    elif sys.platform == "win32":
        os.startfile(path)
    else:
        subprocess.Popen(["xdg-open", path])
