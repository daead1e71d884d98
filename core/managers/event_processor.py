"""
Thread-safe change notifications for the catalog.
"""

import queue
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ..logger import get_logger


CATALOG_ID = "catalog"


class EventType(Enum):
    """Types of catalog events."""
    CATALOG_CHANGED = "catalog_changed"
    DOWNLOAD_STARTED = "download_started"
    DOWNLOAD_COMPLETE = "download_complete"
    DOWNLOAD_ERROR = "download_error"
    PARSE_SKIPPED = "parse_skipped"
    PERSIST_FAILED = "persist_failed"


@dataclass
class CatalogEvent:
    """Event to be delivered to observers."""
    event_type: EventType
    item_id: str
    data: Any = None


class EventProcessor:
    """
    Thread-safe event queue between the controller and its observers.

    Producers (the controller, its worker and timer threads) push events;
    the consumer (GUI main loop or CLI command) polls process_pending().
    """

    def __init__(self):
        self._queue = queue.Queue()
        self._handlers: dict[EventType, list[Callable]] = {}

    def push_event(self, event: CatalogEvent) -> None:
        """Push an event to the queue (safe from any thread)."""
        self._queue.put(event)

    def push(self, event_type: EventType, item_id: str = CATALOG_ID, data: Any = None) -> None:
        """Convenience method to push an event."""
        self.push_event(CatalogEvent(event_type, item_id, data))

    def register_handler(self, event_type: EventType, handler: Callable) -> None:
        """Register a handler for a specific event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def process_pending(self, max_events: int = 50) -> int:
        """
        Process pending events from the queue.

        Args:
            max_events: Maximum number of events to process in one call

        Returns:
            Number of events processed
        """
        processed = 0
        while processed < max_events:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                break
            self._dispatch_event(event)
            processed += 1
        return processed

    def _dispatch_event(self, event: CatalogEvent) -> None:
        """Dispatch an event to its registered handlers."""
        handlers = self._handlers.get(event.event_type, [])
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                get_logger().error(f"Error in {event.event_type.value} handler: {e}")

    def clear(self) -> None:
        """Clear all pending events."""
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
