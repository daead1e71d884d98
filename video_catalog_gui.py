#!/usr/bin/env python3
"""
Video Catalog - GUI Application
Paste a URL, download it with yt-dlp + ffmpeg, browse what is on disk.
"""


def main():
    """Launch the GUI application."""
    # Import here to avoid loading GUI modules when not needed
    from gui.app import MainWindow

    app = MainWindow()
    app.mainloop()


if __name__ == "__main__":
    main()
