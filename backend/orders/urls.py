from django.urls import re_path

from . import views

# API paths answer with or without the trailing slash; an APPEND_SLASH
# redirect would turn a POST or PATCH into a bodiless GET.
urlpatterns = [
    re_path(r"^menu/?$", views.MenuView.as_view(), name="menu"),
    re_path(r"^orders/?$", views.OrdersView.as_view(), name="orders"),
    re_path(r"^orders/stream/?$", views.order_stream, name="orders_stream"),
]
