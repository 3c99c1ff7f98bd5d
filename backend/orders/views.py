from django.http import StreamingHttpResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from restaurant.metrics import track_order_created, track_status_change

from .models import MenuItem
from .serializers import MenuItemSerializer, OrderCreateSerializer, OrderStatusSerializer
from .services.feed import KitchenFeed
from .services.orders import (
    MenuItemNotFoundError,
    OrderNotFoundError,
    create_order,
    load_today_snapshot,
    update_order_status,
)


class MenuView(APIView):
    failure_message = "Failed to fetch menu items"

    def get(self, request):
        qs = MenuItem.objects.all()
        if request.query_params.get("available") == "1":
            qs = qs.filter(available=True)
        return Response(MenuItemSerializer(qs, many=True).data)


class OrdersView(APIView):
    failure_message = {
        "GET": "Failed to fetch orders",
        "POST": "Failed to create order",
        "PATCH": "Failed to update order",
    }

    def get(self, request):
        return Response({"orders": load_today_snapshot()})

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = create_order(
                serializer.validated_data["items"],
                table_number=serializer.validated_data.get("tableNumber"),
            )
        except MenuItemNotFoundError as exc:
            return Response(
                {"detail": "One or more menu items not found", "items": exc.items},
                status=status.HTTP_400_BAD_REQUEST,
            )

        track_order_created()
        return Response(
            {"orderId": order.id, "orderNumber": order.order_number},
            status=status.HTTP_201_CREATED,
        )

    def patch(self, request):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = update_order_status(
                serializer.validated_data["orderId"],
                serializer.validated_data["status"],
            )
        except OrderNotFoundError:
            return Response({"detail": "Order not found"}, status=status.HTTP_404_NOT_FOUND)

        track_status_change(order.status)
        return Response({"orderId": order.id, "status": order.status})


async def order_stream(request):
    feed = KitchenFeed()
    response = StreamingHttpResponse(feed.stream(), content_type="text/event-stream")
    response["Cache-Control"] = "no-cache, no-transform"
    response["X-Accel-Buffering"] = "no"
    return response
