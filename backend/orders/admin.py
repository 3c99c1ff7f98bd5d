from django.contrib import admin

from .models import MenuItem, Order, OrderLineItem


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ["name", "category", "price", "available", "sort_order"]
    list_editable = ["price", "available", "sort_order"]
    list_filter = ["category", "available"]
    search_fields = ["name"]

    def has_delete_permission(self, request, obj=None):
        # Menu items are retired with ``available``; past orders keep pointing at them.
        return False


class OrderLineItemInline(admin.TabularInline):
    model = OrderLineItem
    extra = 0
    readonly_fields = ["menu_item", "quantity", "notes", "price_at_time"]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["order_number", "table_number", "status", "total", "created_at"]
    list_filter = ["status"]
    readonly_fields = ["order_number", "total", "created_at", "updated_at"]
    inlines = [OrderLineItemInline]
