"""
Kitchen display feed.

One ``KitchenFeed`` per connected display. It owns two independent asyncio
tasks: a poll job that re-reads today's orders and queues an ``orders`` event
when the serialized snapshot changed, and a heartbeat job that queues a
``heartbeat`` event so the display can tell "idle" from "disconnected".
Both tasks are cancelled when the stream generator is closed or cancelled.
"""
import asyncio
import json
import logging

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from restaurant.metrics import track_feed_closed, track_feed_opened

from .orders import load_today_snapshot

LOGGER = logging.getLogger(__name__)

FEED_ERROR_MESSAGE = "Failed to fetch orders"


def format_event(event: str, payload: str) -> str:
    return f"event: {event}\ndata: {payload}\n\n"


class KitchenFeed:
    def __init__(self, snapshot=None, poll_interval=None, heartbeat_interval=None):
        self._snapshot = snapshot or load_today_snapshot
        self.poll_interval = (
            poll_interval if poll_interval is not None else settings.KITCHEN_FEED_POLL_SECONDS
        )
        self.heartbeat_interval = (
            heartbeat_interval
            if heartbeat_interval is not None
            else settings.KITCHEN_FEED_HEARTBEAT_SECONDS
        )
        self._queue = asyncio.Queue()
        self._last_payload = None
        self.poll_task = None
        self.heartbeat_task = None

    async def check_for_updates(self):
        try:
            orders = await sync_to_async(self._snapshot)()
            payload = json.dumps({"orders": orders}, cls=DjangoJSONEncoder)
        except Exception:
            LOGGER.exception("Kitchen feed snapshot failed")
            await self._queue.put(
                format_event("error", json.dumps({"message": FEED_ERROR_MESSAGE}))
            )
            return

        if payload != self._last_payload:
            self._last_payload = payload
            await self._queue.put(format_event("orders", payload))

    async def _poll(self):
        while True:
            await asyncio.sleep(self.poll_interval)
            await self.check_for_updates()

    async def _heartbeat(self):
        while True:
            await asyncio.sleep(self.heartbeat_interval)
            payload = json.dumps({"timestamp": timezone.now().isoformat()})
            await self._queue.put(format_event("heartbeat", payload))

    def close(self):
        for task in (self.poll_task, self.heartbeat_task):
            if task is not None and not task.done():
                task.cancel()

    async def stream(self):
        track_feed_opened()
        try:
            await self.check_for_updates()
            self.poll_task = asyncio.create_task(self._poll())
            self.heartbeat_task = asyncio.create_task(self._heartbeat())
            while True:
                yield await self._queue.get()
        finally:
            self.close()
            track_feed_closed()
