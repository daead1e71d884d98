"""
URL input widget.
"""

import customtkinter as ctk
from typing import Callable


class URLInput(ctk.CTkFrame):
    """
    URL entry field with a Download button.
    """

    def __init__(
        self,
        master,
        on_url_submit: Callable[[str], None],
        **kwargs
    ):
        super().__init__(master, **kwargs)

        self._on_url_submit = on_url_submit

        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the UI components."""
        self.url_entry = ctk.CTkEntry(
            self,
            placeholder_text="Enter YouTube URL",
            height=36,
        )
        self.url_entry.pack(side="left", fill="x", expand=True, padx=(0, 8))
        self.url_entry.bind("<Return>", self._on_entry_submit)

        self.download_button = ctk.CTkButton(
            self,
            text="Download Video",
            width=130,
            height=36,
            command=self._on_download_clicked,
        )
        self.download_button.pack(side="left")

    def _on_entry_submit(self, event=None) -> None:
        """Handle Enter key in entry."""
        self._on_download_clicked()

    def _on_download_clicked(self) -> None:
        """Hand the raw text over; blank input is rejected by the controller."""
        self._on_url_submit(self.url_entry.get())

    def clear(self) -> None:
        self.url_entry.delete(0, "end")

    def focus_entry(self) -> None:
        """Focus the URL entry field."""
        self.url_entry.focus_set()

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the input."""
        state = "normal" if enabled else "disabled"
        self.url_entry.configure(state=state)
        self.download_button.configure(state=state)
