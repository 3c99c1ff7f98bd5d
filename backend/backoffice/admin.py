from django.contrib import admin

from .models import AttendanceRecord, DailyBalance, Expense, Staff, WagePayment


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ["date", "category", "description", "amount"]
    list_filter = ["category"]
    search_fields = ["description"]
    ordering = ["-date", "-id"]


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ["name", "active", "created_at"]
    list_filter = ["active"]


@admin.register(WagePayment)
class WagePaymentAdmin(admin.ModelAdmin):
    list_display = ["date", "staff", "amount", "note"]
    list_select_related = ["staff"]
    ordering = ["-date", "-id"]


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ["date", "staff", "status"]
    list_filter = ["status"]


@admin.register(DailyBalance)
class DailyBalanceAdmin(admin.ModelAdmin):
    list_display = ["date", "opening_balance", "closing_balance"]
    ordering = ["-date"]
