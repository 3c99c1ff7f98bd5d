import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient

from orders.models import Order
from .factories import OrderFactory


def _patch(client, payload):
    return client.patch("/api/orders/", payload, format="json")


@pytest.mark.django_db
def test_status_moves_forward():
    order = OrderFactory()
    client = APIClient()

    for status in ("preparing", "ready", "served"):
        res = _patch(client, {"orderId": order.id, "status": status})
        assert res.status_code == 200
        assert res.data == {"orderId": order.id, "status": status}

    order.refresh_from_db()
    assert order.status == Order.Status.SERVED


@pytest.mark.django_db
def test_status_can_move_backwards():
    order = OrderFactory(status=Order.Status.SERVED)
    before = timezone.now() - timedelta(hours=1)
    Order.objects.filter(id=order.id).update(updated_at=before)

    res = _patch(APIClient(), {"orderId": order.id, "status": "pending"})
    assert res.status_code == 200

    order.refresh_from_db()
    assert order.status == Order.Status.PENDING
    assert order.updated_at > before


@pytest.mark.django_db
def test_unknown_order_returns_404():
    res = _patch(APIClient(), {"orderId": 9999, "status": "ready"})
    assert res.status_code == 404
    assert res.data["detail"] == "Order not found"


@pytest.mark.django_db
def test_invalid_status_returns_400():
    order = OrderFactory()
    res = _patch(APIClient(), {"orderId": order.id, "status": "cancelled"})
    assert res.status_code == 400
    assert "Status must be one of" in str(res.data["status"])

    order.refresh_from_db()
    assert order.status == Order.Status.PENDING


@pytest.mark.django_db
def test_missing_order_id_returns_400():
    res = _patch(APIClient(), {"status": "ready"})
    assert res.status_code == 400


@pytest.mark.django_db
def test_kitchen_undo_serve_round_trip():
    order = OrderFactory(status=Order.Status.SERVED)

    res = APIClient().patch("/api/orders", {"orderId": order.id, "status": "pending"}, format="json")
    assert res.status_code == 200
    assert res.data == {"orderId": order.id, "status": "pending"}


def test_kitchen_page_offers_undo_for_served_orders():
    content = APIClient().get("/kitchen/").content.decode("utf-8")
    assert 'const UNDO = { served: "pending" };' in content
    assert "Undo serve" in content
