# backend/orders/services/orders.py
from django.db import transaction
from django.utils import timezone

from utils.dates import day_bounds

from ..models import MenuItem, Order, OrderLineItem
from ..serializers import SnapshotOrderSerializer

ORDER_NUMBER_WIDTH = 3


class OrderError(Exception):
    pass


class MenuItemNotFoundError(OrderError):
    def __init__(self, items):
        super().__init__("One or more menu items not found")
        self.items = items


class OrderNotFoundError(OrderError):
    pass


def format_order_number(count: int) -> str:
    return str(count + 1).zfill(ORDER_NUMBER_WIDTH)


def todays_orders(now=None):
    start, end = day_bounds(timezone.localdate(now) if now else None)
    return Order.objects.filter(created_at__gte=start, created_at__lt=end)


def next_order_number(now=None) -> str:
    # Count-then-format: two submissions racing in the same instant can share a number.
    return format_order_number(todays_orders(now).count())


def create_order(items_payload, table_number=None):
    """
    Price the cart against live menu prices and persist the order with its lines.

    ``items_payload`` is a list of ``{"menuItemId", "quantity", "notes"}`` dicts.
    Every referenced menu item must exist or nothing is written.
    """
    menu_item_ids = {line["menuItemId"] for line in items_payload}
    menu_map = MenuItem.objects.in_bulk(menu_item_ids)

    missing = sorted(mid for mid in menu_item_ids if mid not in menu_map)
    if missing:
        raise MenuItemNotFoundError(missing)

    total = 0
    lines = []
    for line in items_payload:
        menu_item = menu_map[line["menuItemId"]]
        total += menu_item.price * line["quantity"]
        lines.append(
            {
                "menu_item": menu_item,
                "quantity": line["quantity"],
                "notes": line.get("notes") or None,
                "price_at_time": menu_item.price,
            }
        )

    with transaction.atomic():
        order = Order.objects.create(
            order_number=next_order_number(),
            table_number=table_number or None,
            status=Order.Status.PENDING,
            total=total,
        )
        OrderLineItem.objects.bulk_create(
            [OrderLineItem(order=order, **line) for line in lines]
        )
    return order


def update_order_status(order_id: int, new_status: str):
    # Any status may follow any other; the kitchen uses served -> pending as "undo".
    order = Order.objects.filter(id=order_id).first()
    if order is None:
        raise OrderNotFoundError("Order not found")
    order.status = new_status
    order.save(update_fields=["status", "updated_at"])
    return order


def load_today_snapshot():
    qs = (
        todays_orders()
        .prefetch_related("items__menu_item")
        .order_by("created_at", "id")
    )
    return SnapshotOrderSerializer(qs, many=True).data
