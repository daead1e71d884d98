"""
GUI widget components.
"""

from .url_input import URLInput
from .catalog_list import CatalogList
from .catalog_item_widget import CatalogItemWidget
from .log_viewer import LogViewer

__all__ = ["URLInput", "CatalogList", "CatalogItemWidget", "LogViewer"]
