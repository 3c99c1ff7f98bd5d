from django.db import models
from django.utils import timezone


class MenuItem(models.Model):
    name = models.CharField(max_length=140)
    category = models.CharField(max_length=80)
    # Integer minor currency units (cents).
    price = models.PositiveIntegerField(default=0)
    available = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["sort_order", "id"]
        indexes = [
            models.Index(fields=["category", "sort_order"], name="orders_menu_category_idx"),
        ]

    def __str__(self):
        return self.name


class Order(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        PREPARING = "preparing", "Preparing"
        READY = "ready", "Ready"
        SERVED = "served", "Served"

    order_number = models.CharField(max_length=10)
    table_number = models.CharField(max_length=20, null=True, blank=True)
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PENDING)
    total = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["created_at"], name="orders_order_created_idx"),
            models.Index(fields=["status"], name="orders_order_status_idx"),
        ]

    def __str__(self):
        return f"Order #{self.order_number}"


class OrderLineItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    menu_item = models.ForeignKey(MenuItem, on_delete=models.PROTECT, related_name="order_items")
    quantity = models.PositiveIntegerField()
    notes = models.CharField(max_length=255, null=True, blank=True)
    # Menu price captured at submission; never rewritten.
    price_at_time = models.PositiveIntegerField()

    class Meta:
        indexes = [
            models.Index(fields=["order"], name="orders_item_order_idx"),
        ]

    def __str__(self):
        return f"{self.menu_item_id} x{self.quantity}"

    @property
    def line_total(self):
        return self.quantity * self.price_at_time
