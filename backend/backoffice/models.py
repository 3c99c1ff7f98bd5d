from django.db import models
from django.utils import timezone

# Dates are stored as ISO "YYYY-MM-DD" strings; lexical order is calendar order.
DATE_LENGTH = 10


class Expense(models.Model):
    class Category(models.TextChoices):
        INGREDIENTS = "ingredients", "Ingredients"
        RENT = "rent", "Rent"
        WAGES = "wages", "Wages"
        UTILITIES = "utilities", "Utilities"
        OTHER = "other", "Other"

    category = models.CharField(max_length=20, choices=Category.choices)
    description = models.CharField(max_length=255)
    amount = models.PositiveIntegerField()
    date = models.CharField(max_length=DATE_LENGTH)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["date"], name="backoffice_expense_date_idx"),
            models.Index(fields=["category", "date"], name="backoffice_expense_cat_idx"),
        ]

    def __str__(self):
        return f"{self.date} {self.category} {self.amount}"


class Staff(models.Model):
    name = models.CharField(max_length=120)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name_plural = "staff"

    def __str__(self):
        return self.name


class AttendanceRecord(models.Model):
    class Status(models.TextChoices):
        PRESENT = "present", "Present"
        ABSENT = "absent", "Absent"
        DAY_OFF = "day_off", "Day off"

    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name="attendance")
    date = models.CharField(max_length=DATE_LENGTH)
    status = models.CharField(max_length=10, choices=Status.choices)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        # One record per (staff, date) is kept by the upsert in the API, not by the schema.
        indexes = [
            models.Index(fields=["staff", "date"], name="backoffice_attend_staff_idx"),
            models.Index(fields=["date"], name="backoffice_attend_date_idx"),
        ]

    def __str__(self):
        return f"{self.staff_id} {self.date} {self.status}"


class WagePayment(models.Model):
    staff = models.ForeignKey(Staff, on_delete=models.PROTECT, related_name="wage_payments")
    amount = models.PositiveIntegerField()
    date = models.CharField(max_length=DATE_LENGTH)
    note = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["date"], name="backoffice_wage_date_idx"),
        ]

    def __str__(self):
        return f"{self.staff_id} {self.date} {self.amount}"


class DailyBalance(models.Model):
    date = models.CharField(max_length=DATE_LENGTH, unique=True)
    opening_balance = models.IntegerField()
    closing_balance = models.IntegerField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.date} {self.opening_balance} -> {self.closing_balance}"
