import pytest
from rest_framework.test import APIClient

from backoffice.models import AttendanceRecord
from .factories import AttendanceRecordFactory, StaffFactory


@pytest.mark.django_db
def test_set_attendance_is_an_upsert():
    member = StaffFactory()
    client = APIClient()
    payload = {"staffId": member.id, "date": "2025-01-15", "status": "present"}

    res = client.post("/api/attendance/", payload, format="json")
    assert res.status_code == 201

    res = client.post("/api/attendance/", {**payload, "status": "absent"}, format="json")
    assert res.status_code == 200
    assert res.data["status"] == "absent"

    records = AttendanceRecord.objects.filter(staff=member, date="2025-01-15")
    assert records.count() == 1
    assert records.get().status == "absent"

    res = client.get("/api/attendance/", {"startDate": "2025-01-15", "endDate": "2025-01-15"})
    assert len(res.data["attendance"]) == 1


@pytest.mark.django_db
def test_set_attendance_validation():
    member = StaffFactory()
    client = APIClient()

    res = client.post(
        "/api/attendance/", {"staffId": member.id, "date": "15-01-2025", "status": "present"}, format="json"
    )
    assert res.status_code == 400
    assert "date is required in YYYY-MM-DD format" in str(res.data["date"])

    res = client.post(
        "/api/attendance/", {"staffId": member.id, "date": "2025-01-15", "status": "late"}, format="json"
    )
    assert res.status_code == 400

    res = client.post(
        "/api/attendance/", {"staffId": member.id + 10, "date": "2025-01-15", "status": "present"}, format="json"
    )
    assert res.status_code == 404


@pytest.mark.django_db
def test_list_attendance_requires_range():
    res = APIClient().get("/api/attendance/", {"startDate": "2025-01-01"})
    assert res.status_code == 400
    assert "startDate and endDate are required" in str(res.data)


@pytest.mark.django_db
def test_list_attendance_in_range():
    member = StaffFactory(name="Ravi")
    StaffFactory(name="Gone", active=False)
    AttendanceRecordFactory(staff=member, date="2025-01-10")
    AttendanceRecordFactory(staff=member, date="2025-01-11", status="day_off")
    AttendanceRecordFactory(staff=member, date="2025-02-01")

    res = APIClient().get("/api/attendance/", {"startDate": "2025-01-01", "endDate": "2025-01-31"})
    assert res.status_code == 200
    assert [row["name"] for row in res.data["staff"]] == ["Ravi"]
    assert [(row["date"], row["status"]) for row in res.data["attendance"]] == [
        ("2025-01-10", "present"),
        ("2025-01-11", "day_off"),
    ]


@pytest.mark.django_db
def test_update_attendance_by_id():
    record = AttendanceRecordFactory()
    client = APIClient()

    res = client.patch("/api/attendance/", {"id": record.id, "status": "absent"}, format="json")
    assert res.status_code == 200
    record.refresh_from_db()
    assert record.status == "absent"

    res = client.patch("/api/attendance/", {"id": record.id + 1, "status": "absent"}, format="json")
    assert res.status_code == 404


@pytest.mark.django_db
def test_delete_attendance():
    record = AttendanceRecordFactory(date="2025-01-15")
    client = APIClient()

    assert client.delete("/api/attendance/").status_code == 400
    assert client.delete(f"/api/attendance/?staffId={record.staff_id}&date=2025-01-16").status_code == 404

    res = client.delete(f"/api/attendance/?staffId={record.staff_id}&date=2025-01-15")
    assert res.status_code == 200
    assert not AttendanceRecord.objects.exists()
