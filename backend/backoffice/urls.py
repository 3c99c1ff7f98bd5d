from django.urls import re_path

from . import views

urlpatterns = [
    re_path(r"^expenses/?$", views.ExpensesView.as_view(), name="expenses"),
    re_path(r"^expenses/export/?$", views.ExpensesExportView.as_view(), name="expenses-export"),
    re_path(r"^staff/?$", views.StaffView.as_view(), name="staff"),
    re_path(r"^wages/?$", views.WagesView.as_view(), name="wages"),
    re_path(r"^attendance/?$", views.AttendanceView.as_view(), name="attendance"),
    re_path(r"^balance/?$", views.BalanceView.as_view(), name="balance"),
]
