import pytest
from rest_framework.test import APIClient

from backoffice.models import Staff
from .factories import StaffFactory, WagePaymentFactory


@pytest.mark.django_db
def test_create_and_list_staff():
    client = APIClient()
    res = client.post("/api/staff/", {"name": "Ravi"}, format="json")
    assert res.status_code == 201
    assert res.data["active"] is True

    StaffFactory(name="Anil", active=False)
    res = client.get("/api/staff/")
    assert [row["name"] for row in res.data] == ["Ravi"]


@pytest.mark.django_db
def test_create_staff_requires_name():
    res = APIClient().post("/api/staff/", {"name": "  "}, format="json")
    assert res.status_code == 400
    assert "Name is required" in str(res.data["name"])


@pytest.mark.django_db
def test_delete_staff_is_soft_and_keeps_wage_history():
    member = StaffFactory()
    WagePaymentFactory(staff=member)
    client = APIClient()

    res = client.delete(f"/api/staff/?id={member.id}")
    assert res.status_code == 200

    member.refresh_from_db()
    assert member.active is False
    assert member.wage_payments.count() == 1
    assert client.delete("/api/staff/?id=9999").status_code == 404
    assert Staff.objects.count() == 1
