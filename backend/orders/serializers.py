from rest_framework import serializers

from .models import MenuItem, Order, OrderLineItem


class MenuItemSerializer(serializers.ModelSerializer):
    sortOrder = serializers.IntegerField(source="sort_order", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = MenuItem
        fields = ["id", "name", "category", "price", "available", "sortOrder", "createdAt"]


class OrderItemInputSerializer(serializers.Serializer):
    menuItemId = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class OrderCreateSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(
        many=True,
        error_messages={
            "required": "Order must contain at least one item",
            "not_a_list": "Order must contain at least one item",
            "empty": "Order must contain at least one item",
        },
    )
    tableNumber = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("Order must contain at least one item")
        return value


class OrderStatusSerializer(serializers.Serializer):
    orderId = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(
        choices=Order.Status.values,
        error_messages={"invalid_choice": "Status must be one of: pending, preparing, ready, served"},
    )


class SnapshotItemSerializer(serializers.ModelSerializer):
    menuItemName = serializers.CharField(source="menu_item.name")
    priceAtTime = serializers.IntegerField(source="price_at_time")

    class Meta:
        model = OrderLineItem
        fields = ["id", "menuItemName", "quantity", "notes", "priceAtTime"]


class SnapshotOrderSerializer(serializers.ModelSerializer):
    orderNumber = serializers.CharField(source="order_number")
    tableNumber = serializers.CharField(source="table_number", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    items = SnapshotItemSerializer(many=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "tableNumber",
            "status",
            "total",
            "createdAt",
            "updatedAt",
            "items",
        ]
