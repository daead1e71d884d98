from core.managers.event_processor import CATALOG_ID, EventProcessor, EventType


def test_handlers_receive_events_in_order():
    events = EventProcessor()
    seen = []
    events.register_handler(EventType.CATALOG_CHANGED, lambda e: seen.append(("a", e.data)))
    events.register_handler(EventType.CATALOG_CHANGED, lambda e: seen.append(("b", e.data)))

    events.push(EventType.CATALOG_CHANGED, data=1)
    events.push(EventType.CATALOG_CHANGED, data=2)

    assert events.process_pending() == 2
    assert seen == [("a", 1), ("b", 1), ("a", 2), ("b", 2)]


def test_default_item_id_is_catalog():
    events = EventProcessor()
    seen = []
    events.register_handler(EventType.DOWNLOAD_STARTED, seen.append)
    events.push(EventType.DOWNLOAD_STARTED, data="https://a")
    events.process_pending()
    assert seen[0].item_id == CATALOG_ID


def test_failing_handler_does_not_stop_dispatch():
    events = EventProcessor()
    seen = []

    def broken(event):
        raise RuntimeError("handler bug")

    events.register_handler(EventType.DOWNLOAD_ERROR, broken)
    events.register_handler(EventType.DOWNLOAD_ERROR, seen.append)
    events.push(EventType.DOWNLOAD_ERROR)

    assert events.process_pending() == 1
    assert len(seen) == 1


def test_process_pending_respects_limit_and_clear():
    events = EventProcessor()
    for _ in range(5):
        events.push(EventType.CATALOG_CHANGED)

    assert events.process_pending(max_events=3) == 3
    events.clear()
    assert events.process_pending() == 0
