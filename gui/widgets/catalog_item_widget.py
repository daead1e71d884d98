"""
Individual catalog entry widget for display in the catalog list.
"""

import customtkinter as ctk
from typing import Callable, Optional

from core.models.metadata_record import MetadataRecord


class CatalogItemWidget(ctk.CTkFrame):
    """
    Widget displaying one cataloged video with Open and Remove buttons.
    """

    def __init__(
        self,
        master,
        record: MetadataRecord,
        on_open: Optional[Callable[[MetadataRecord], None]] = None,
        on_remove: Optional[Callable[[MetadataRecord], None]] = None,
        **kwargs
    ):
        super().__init__(master, corner_radius=6, **kwargs)

        self.record = record
        self._on_open = on_open
        self._on_remove = on_remove

        self._setup_ui()
        self.update_display()

    def _setup_ui(self) -> None:
        """Set up the UI components."""
        self.grid_columnconfigure(0, weight=1)

        self.title_label = ctk.CTkLabel(
            self,
            text="",
            anchor="w",
            font=ctk.CTkFont(size=13, weight="bold"),
        )
        self.title_label.grid(row=0, column=0, sticky="ew", padx=(8, 8), pady=(8, 0))

        self.byline_label = ctk.CTkLabel(
            self,
            text="",
            anchor="w",
            font=ctk.CTkFont(size=11),
        )
        self.byline_label.grid(row=1, column=0, sticky="ew", padx=(8, 8))

        self.views_label = ctk.CTkLabel(
            self,
            text="",
            anchor="w",
            font=ctk.CTkFont(size=10),
            text_color="gray60",
        )
        self.views_label.grid(row=2, column=0, sticky="ew", padx=(8, 8), pady=(0, 8))

        self.open_button = ctk.CTkButton(
            self,
            text="Open",
            width=70,
            height=28,
            command=self._on_open_clicked,
        )
        self.open_button.grid(row=0, column=1, rowspan=3, padx=(0, 4))

        self.remove_button = ctk.CTkButton(
            self,
            text="X",
            width=28,
            height=28,
            fg_color="transparent",
            hover_color="gray40",
            text_color="gray60",
            font=ctk.CTkFont(size=12),
            command=self._on_remove_clicked,
        )
        self.remove_button.grid(row=0, column=2, rowspan=3, padx=(0, 8))

    def update_display(self) -> None:
        """Update the widget display from the record."""
        self.title_label.configure(text=self.record.get_display_title(60))
        self.byline_label.configure(text=self.record.get_byline())
        self.views_label.configure(text=f"Views: {self.record.views:,}")

        # Media file may have been moved or never transcoded
        if self.record.media_exists():
            self.open_button.configure(state="normal")
            self.title_label.configure(text_color=("gray10", "gray90"))
        else:
            self.open_button.configure(state="disabled")
            self.title_label.configure(text_color="#d4a700")

    def _on_open_clicked(self) -> None:
        if self._on_open:
            self._on_open(self.record)

    def _on_remove_clicked(self) -> None:
        if self._on_remove:
            self._on_remove(self.record)
