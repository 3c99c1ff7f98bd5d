from django.db.models import Count, Sum

from orders.models import Order, OrderLineItem
from utils.dates import day_bounds

TOP_ITEMS_LIMIT = 5


def daily_summary(day):
    """Order count, revenue, per-status counts and best sellers for one local day."""
    start, end = day_bounds(day)
    orders = Order.objects.filter(created_at__gte=start, created_at__lt=end)

    totals = orders.aggregate(total_orders=Count("id"), total_revenue=Sum("total"))

    status_counts = {value: 0 for value in Order.Status.values}
    for row in orders.values("status").annotate(count=Count("id")).order_by("status"):
        status_counts[row["status"]] = row["count"]

    top_items = (
        OrderLineItem.objects.filter(order__created_at__gte=start, order__created_at__lt=end)
        .values("menu_item_id", "menu_item__name")
        .annotate(total_quantity=Sum("quantity"))
        .order_by("-total_quantity", "menu_item_id")[:TOP_ITEMS_LIMIT]
    )

    return {
        "date": day.isoformat(),
        "totalOrders": totals["total_orders"] or 0,
        "totalRevenue": totals["total_revenue"] or 0,
        "statusCounts": status_counts,
        "topItems": [
            {
                "menuItemId": row["menu_item_id"],
                "menuItemName": row["menu_item__name"],
                "totalQuantity": row["total_quantity"],
            }
            for row in top_items
        ],
    }
