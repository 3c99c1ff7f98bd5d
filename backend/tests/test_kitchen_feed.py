import asyncio
import json

import pytest
from asgiref.sync import async_to_sync
from prometheus_client import REGISTRY
from rest_framework.test import APIClient

from orders.services.feed import KitchenFeed, format_event
from .factories import MenuItemFactory, OrderFactory, OrderLineItemFactory


def _read_events(feed, count):
    """Pull ``count`` events from a feed, then close it like a disconnecting client."""

    async def run():
        stream = feed.stream()
        events = []
        for _ in range(count):
            events.append(await asyncio.wait_for(stream.__anext__(), timeout=5))
        await stream.aclose()
        await asyncio.gather(feed.poll_task, feed.heartbeat_task, return_exceptions=True)
        return events

    return async_to_sync(run)()


def _parse(raw):
    event_line, data_line = raw.strip().split("\n")
    return event_line[len("event: "):], json.loads(data_line[len("data: "):])


class _Snapshots:
    def __init__(self, *results):
        self.results = list(results)

    def __call__(self):
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


def test_format_event_frames_one_message():
    assert format_event("orders", '{"orders": []}') == 'event: orders\ndata: {"orders": []}\n\n'


def test_first_event_is_current_snapshot():
    feed = KitchenFeed(snapshot=_Snapshots([{"id": 1}]), poll_interval=60, heartbeat_interval=60)
    (event,) = _read_events(feed, 1)
    assert _parse(event) == ("orders", {"orders": [{"id": 1}]})


def test_unchanged_snapshot_is_not_resent():
    snapshots = _Snapshots([{"id": 1}], [{"id": 1}], [{"id": 1}], [{"id": 1}, {"id": 2}])
    feed = KitchenFeed(snapshot=snapshots, poll_interval=0.01, heartbeat_interval=60)

    first, second = _read_events(feed, 2)
    assert _parse(first) == ("orders", {"orders": [{"id": 1}]})
    assert _parse(second) == ("orders", {"orders": [{"id": 1}, {"id": 2}]})


def test_snapshot_failure_becomes_error_event_and_stream_recovers():
    snapshots = _Snapshots(RuntimeError("database is locked"), [{"id": 3}])
    feed = KitchenFeed(snapshot=snapshots, poll_interval=0.01, heartbeat_interval=60)

    first, second = _read_events(feed, 2)
    assert _parse(first) == ("error", {"message": "Failed to fetch orders"})
    assert _parse(second) == ("orders", {"orders": [{"id": 3}]})


def test_heartbeat_is_sent_while_idle():
    feed = KitchenFeed(snapshot=_Snapshots([]), poll_interval=60, heartbeat_interval=0.01)

    first, second = _read_events(feed, 2)
    assert _parse(first) == ("orders", {"orders": []})
    name, payload = _parse(second)
    assert name == "heartbeat"
    assert "timestamp" in payload


def test_closing_stream_cancels_both_tasks():
    before = REGISTRY.get_sample_value("restaurant_kitchen_feed_connections")
    feed = KitchenFeed(snapshot=_Snapshots([]), poll_interval=0.01, heartbeat_interval=0.01)

    _read_events(feed, 1)

    assert feed.poll_task.done()
    assert feed.heartbeat_task.done()
    assert REGISTRY.get_sample_value("restaurant_kitchen_feed_connections") == before


@pytest.mark.django_db
def test_default_snapshot_reads_todays_orders():
    item = MenuItemFactory(name="Gyoza")
    order = OrderFactory(table_number="4")
    OrderLineItemFactory(order=order, menu_item=item, quantity=2, notes="extra sauce")

    feed = KitchenFeed(poll_interval=60, heartbeat_interval=60)
    (event,) = _read_events(feed, 1)

    name, payload = _parse(event)
    assert name == "orders"
    (row,) = payload["orders"]
    assert row["orderNumber"] == order.order_number
    assert row["tableNumber"] == "4"
    assert row["items"][0]["menuItemName"] == "Gyoza"
    assert row["items"][0]["notes"] == "extra sauce"


def test_stream_endpoint_sets_event_stream_headers():
    res = APIClient().get("/api/orders/stream/")
    assert res.status_code == 200
    assert res["Content-Type"].startswith("text/event-stream")
    assert res["Cache-Control"] == "no-cache, no-transform"
    assert res.streaming
