from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import AdminUser
from orders.models import MenuItem

MENU = [
    ("Fried Noodles - Chicken", "Noodles"),
    ("Fried Noodles - Beef", "Noodles"),
    ("Boiled Noodles - Beef", "Noodles"),
    ("Boiled Noodles - Sichuan", "Noodles"),
    ("Boiled Noodles - Black Bean", "Noodles"),
    ("Gyoza", "Dumplings"),
    ("Niouk Yen", "Dumplings"),
    ("Sao Mai", "Dumplings"),
    ("Bread - Beef", "Bread"),
    ("Bread - Sichuan", "Bread"),
    ("Bread - Tikka", "Bread"),
    ("Bread - Black Bean", "Bread"),
    ("Halim - Veg", "Halim"),
    ("Halim - Lamb", "Halim"),
    ("Fried Rice - Chicken", "Fried Rice"),
]


class Command(BaseCommand):
    help = "Seed the menu and the default admin user."

    def add_arguments(self, parser):
        parser.add_argument("--admin-username", default="admin")
        parser.add_argument("--admin-password", default="admin123")
        parser.add_argument(
            "--price",
            type=int,
            default=0,
            help="Price (minor units) given to newly created menu items.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for position, (name, category) in enumerate(MENU, start=1):
            _, was_created = MenuItem.objects.update_or_create(
                name=name,
                defaults={"category": category, "sort_order": position},
                create_defaults={
                    "category": category,
                    "sort_order": position,
                    "price": options["price"],
                },
            )
            created += int(was_created)
        self.stdout.write(f"Menu: {created} created, {len(MENU) - created} updated.")

        username = options["admin_username"]
        admin, _ = AdminUser.objects.get_or_create(username=username)
        admin.set_password(options["admin_password"])
        admin.save()
        self.stdout.write(self.style.SUCCESS(f"Admin user ready (username: {username})."))
