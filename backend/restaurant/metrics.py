from django.http import HttpResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, generate_latest

ORDERS_CREATED = Counter(
    "restaurant_orders_created_total",
    "Orders submitted from the order tablet",
)
ORDER_STATUS_CHANGES = Counter(
    "restaurant_order_status_changes_total",
    "Order status changes",
    ["status"],
)
KITCHEN_FEED_CONNECTIONS = Gauge(
    "restaurant_kitchen_feed_connections",
    "Kitchen displays currently subscribed to the order stream",
)


def metrics_view(request):
    payload = generate_latest()
    return HttpResponse(payload, content_type=CONTENT_TYPE_LATEST)


def track_order_created():
    ORDERS_CREATED.inc()


def track_status_change(status):
    ORDER_STATUS_CHANGES.labels(status=status or "unknown").inc()


def track_feed_opened():
    KITCHEN_FEED_CONNECTIONS.inc()


def track_feed_closed():
    KITCHEN_FEED_CONNECTIONS.dec()
