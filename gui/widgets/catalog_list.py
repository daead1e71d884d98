"""
Scrollable catalog list widget.
"""

import customtkinter as ctk
from typing import Callable, List, Optional, Sequence

from core.models.metadata_record import MetadataRecord
from .catalog_item_widget import CatalogItemWidget


class CatalogList(ctk.CTkScrollableFrame):
    """
    Scrollable list of cataloged videos, rebuilt whenever the catalog changes.
    """

    def __init__(
        self,
        master,
        on_item_open: Optional[Callable[[MetadataRecord], None]] = None,
        on_item_remove: Optional[Callable[[int], None]] = None,
        **kwargs
    ):
        super().__init__(master, **kwargs)

        self._on_item_open = on_item_open
        self._on_item_remove = on_item_remove
        self._item_widgets: List[CatalogItemWidget] = []

        # Configure for vertical list layout
        self.grid_columnconfigure(0, weight=1)

    def set_records(self, records: Sequence[MetadataRecord]) -> None:
        """Replace the displayed entries with the given catalog snapshot."""
        self.clear()
        for row, record in enumerate(records):
            widget = CatalogItemWidget(
                self,
                record,
                on_open=self._on_item_open,
                on_remove=lambda _record, index=row: self._handle_item_remove(index),
            )
            widget.grid(row=row, column=0, sticky="ew", pady=(0, 4))
            self._item_widgets.append(widget)

    def clear(self) -> None:
        """Remove all items from the list."""
        for widget in self._item_widgets:
            widget.destroy()
        self._item_widgets.clear()

    def _handle_item_remove(self, index: int) -> None:
        """Forward a row's remove click with the catalog position it was drawn at."""
        if self._on_item_remove:
            self._on_item_remove(index)

    def get_item_count(self) -> int:
        """Get the number of items in the list."""
        return len(self._item_widgets)
