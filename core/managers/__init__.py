"""
Catalog managers for persistence, state and events.
"""

from .catalog_store import CatalogStore
from .catalog_controller import CatalogController
from .event_processor import EventProcessor, CatalogEvent, EventType

__all__ = ["CatalogStore", "CatalogController", "EventProcessor", "CatalogEvent", "EventType"]
