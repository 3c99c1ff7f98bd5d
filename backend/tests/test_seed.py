import pytest
from django.core.management import call_command

from accounts.models import AdminUser
from orders.models import MenuItem


@pytest.mark.django_db
def test_seed_creates_menu_and_admin():
    call_command("seed_restaurant")

    assert MenuItem.objects.count() == 15
    first = MenuItem.objects.first()
    assert first.name == "Fried Noodles - Chicken"
    assert first.category == "Noodles"
    assert first.available is True

    admin = AdminUser.objects.get(username="admin")
    assert admin.check_password("admin123")


@pytest.mark.django_db
def test_seed_is_idempotent_and_keeps_prices():
    call_command("seed_restaurant", price=500)
    MenuItem.objects.filter(name="Gyoza").update(price=650)

    call_command("seed_restaurant", admin_password="changed")

    assert MenuItem.objects.count() == 15
    assert MenuItem.objects.get(name="Gyoza").price == 650
    assert MenuItem.objects.get(name="Sao Mai").price == 500
    assert AdminUser.objects.count() == 1
    assert AdminUser.objects.get().check_password("changed")
