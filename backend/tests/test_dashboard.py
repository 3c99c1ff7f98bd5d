import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient

from orders.models import Order
from .factories import MenuItemFactory, OrderFactory, OrderLineItemFactory


@pytest.mark.django_db
def test_dashboard_empty_day():
    res = APIClient().get("/api/dashboard/")
    assert res.status_code == 200
    assert res.data == {
        "date": timezone.localdate().isoformat(),
        "totalOrders": 0,
        "totalRevenue": 0,
        "statusCounts": {"pending": 0, "preparing": 0, "ready": 0, "served": 0},
        "topItems": [],
    }


@pytest.mark.django_db
def test_dashboard_aggregates_selected_day_only():
    noodles = MenuItemFactory(name="Noodles")
    gyoza = MenuItemFactory(name="Gyoza")

    first = OrderFactory(total=1500, status=Order.Status.SERVED)
    OrderLineItemFactory(order=first, menu_item=noodles, quantity=1)
    OrderLineItemFactory(order=first, menu_item=gyoza, quantity=2)
    second = OrderFactory(total=900, status=Order.Status.PENDING)
    OrderLineItemFactory(order=second, menu_item=gyoza, quantity=3)

    old = OrderFactory(total=10000, created_at=timezone.now() - timedelta(days=3))
    OrderLineItemFactory(order=old, menu_item=noodles, quantity=50)

    res = APIClient().get("/api/dashboard/", {"date": timezone.localdate().isoformat()})
    assert res.status_code == 200
    assert res.data["totalOrders"] == 2
    assert res.data["totalRevenue"] == 2400
    assert res.data["statusCounts"] == {"pending": 1, "preparing": 0, "ready": 0, "served": 1}
    assert res.data["topItems"] == [
        {"menuItemId": gyoza.id, "menuItemName": "Gyoza", "totalQuantity": 5},
        {"menuItemId": noodles.id, "menuItemName": "Noodles", "totalQuantity": 1},
    ]


@pytest.mark.django_db
def test_dashboard_top_items_capped_at_five():
    order = OrderFactory()
    for quantity in range(1, 8):
        OrderLineItemFactory(order=order, menu_item=MenuItemFactory(), quantity=quantity)

    res = APIClient().get("/api/dashboard/")
    quantities = [row["totalQuantity"] for row in res.data["topItems"]]
    assert quantities == [7, 6, 5, 4, 3]


@pytest.mark.django_db
def test_dashboard_past_date():
    day = timezone.localdate() - timedelta(days=3)
    OrderFactory(total=700, created_at=timezone.now() - timedelta(days=3))

    res = APIClient().get("/api/dashboard/", {"date": day.isoformat()})
    assert res.data["date"] == day.isoformat()
    assert res.data["totalOrders"] == 1
    assert res.data["totalRevenue"] == 700


@pytest.mark.django_db
def test_dashboard_invalid_date():
    res = APIClient().get("/api/dashboard/", {"date": "2025-13-40"})
    assert res.status_code == 400
    assert res.data["detail"] == "Invalid date format. Use YYYY-MM-DD"
