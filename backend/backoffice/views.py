import csv
import io

from django.db import transaction
from openpyxl import Workbook
from rest_framework import status
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from utils.dates import is_valid_date
from utils.renderers import CSVRenderer, XLSXRenderer

from .models import AttendanceRecord, DailyBalance, Expense, Staff, WagePayment
from .serializers import (
    AttendanceSerializer,
    AttendanceUpdateSerializer,
    BalanceSerializer,
    ExpenseQuerySerializer,
    ExpenseSerializer,
    DateRangeQuerySerializer,
    RequiredDateRangeQuerySerializer,
    StaffSerializer,
    WagePaymentSerializer,
)


def _apply_date_range(qs, params):
    if params.get("startDate"):
        qs = qs.filter(date__gte=params["startDate"])
    if params.get("endDate"):
        qs = qs.filter(date__lte=params["endDate"])
    return qs


def _parse_id(raw, label):
    """Return ``(id, error_response)`` for a ``?id=``-style query parameter."""
    if not raw:
        return None, Response({"detail": f"{label} ID is required"}, status=status.HTTP_400_BAD_REQUEST)
    try:
        return int(raw), None
    except (TypeError, ValueError):
        return None, Response({"detail": f"Invalid {label.lower()} ID"}, status=status.HTTP_400_BAD_REQUEST)


# --------------------------------
# Expenses
# --------------------------------

def _filtered_expenses(request):
    query = ExpenseQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    params = query.validated_data

    qs = _apply_date_range(Expense.objects.all(), params)
    if params.get("category"):
        qs = qs.filter(category=params["category"])
    return qs.order_by("-date", "-id")


class ExpensesView(APIView):
    failure_message = {
        "GET": "Failed to fetch expenses",
        "POST": "Failed to create expense",
        "DELETE": "Failed to delete expense",
    }

    def get(self, request):
        expenses = list(_filtered_expenses(request))

        category_totals = {category: 0 for category in Expense.Category.values}
        grand_total = 0
        for expense in expenses:
            category_totals[expense.category] += expense.amount
            grand_total += expense.amount

        return Response(
            {
                "expenses": ExpenseSerializer(expenses, many=True).data,
                "categoryTotals": category_totals,
                "grandTotal": grand_total,
            }
        )

    def post(self, request):
        serializer = ExpenseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        expense = serializer.save()
        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        expense_id, error = _parse_id(request.query_params.get("id"), "Expense")
        if error:
            return error

        expense = Expense.objects.filter(id=expense_id).first()
        if not expense:
            return Response({"detail": "Expense not found"}, status=status.HTTP_404_NOT_FOUND)
        expense.delete()
        return Response({"success": True})


EXPORT_HEADERS = ["id", "date", "category", "description", "amount"]


class ExpensesExportView(APIView):
    renderer_classes = [JSONRenderer, CSVRenderer, XLSXRenderer]
    failure_message = "Failed to export expenses"

    def get(self, request):
        expenses = _filtered_expenses(request)
        rows = [
            [expense.id, expense.date, expense.category, expense.description, expense.amount]
            for expense in expenses
        ]

        if request.accepted_renderer.format == "xlsx":
            workbook = Workbook()
            sheet = workbook.active
            sheet.title = "Expenses"
            sheet.append(EXPORT_HEADERS)
            for row in rows:
                sheet.append(row)
            sheet.append(["", "", "", "TOTAL", sum(row[4] for row in rows)])
            buffer = io.BytesIO()
            workbook.save(buffer)
            response = Response(buffer.getvalue())
            response["Content-Disposition"] = 'attachment; filename="expenses.xlsx"'
            return response

        if request.accepted_renderer.format == "csv":
            buffer = io.StringIO()
            buffer.write("\ufeff")
            writer = csv.writer(buffer, delimiter=";")
            writer.writerow(EXPORT_HEADERS)
            writer.writerows(rows)
            writer.writerow(["TOTAL", "", "", "", sum(row[4] for row in rows)])
            response = Response(buffer.getvalue())
            response["Content-Disposition"] = 'attachment; filename="expenses.csv"'
            return response

        return Response({"headers": EXPORT_HEADERS, "rows": rows})


# --------------------------------
# Staff
# --------------------------------

class StaffView(APIView):
    failure_message = {
        "GET": "Failed to fetch staff",
        "POST": "Failed to create staff",
        "DELETE": "Failed to delete staff",
    }

    def get(self, request):
        staff = Staff.objects.filter(active=True).order_by("name", "id")
        return Response(StaffSerializer(staff, many=True).data)

    def post(self, request):
        serializer = StaffSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = serializer.save(active=True)
        return Response(StaffSerializer(member).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        staff_id, error = _parse_id(request.query_params.get("id"), "Staff")
        if error:
            return error

        member = Staff.objects.filter(id=staff_id).first()
        if not member:
            return Response({"detail": "Staff member not found"}, status=status.HTTP_404_NOT_FOUND)
        # Soft delete: wage and attendance history keep pointing at the row.
        member.active = False
        member.save(update_fields=["active"])
        return Response({"success": True})


# --------------------------------
# Wages
# --------------------------------

class WagesView(APIView):
    failure_message = {
        "GET": "Failed to fetch wages",
        "POST": "Failed to create wage entry",
        "DELETE": "Failed to delete wage entry",
    }

    def get(self, request):
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        wages = list(
            _apply_date_range(WagePayment.objects.select_related("staff"), query.validated_data)
            .order_by("-date", "-id")
        )

        staff_totals = {}
        grand_total = 0
        for wage in wages:
            entry = staff_totals.setdefault(str(wage.staff_id), {"name": wage.staff.name, "total": 0})
            entry["total"] += wage.amount
            grand_total += wage.amount

        return Response(
            {
                "wages": WagePaymentSerializer(wages, many=True).data,
                "staffTotals": staff_totals,
                "grandTotal": grand_total,
            }
        )

    def post(self, request):
        serializer = WagePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if not Staff.objects.filter(id=serializer.validated_data["staff_id"]).exists():
            return Response({"detail": "Staff member not found"}, status=status.HTTP_404_NOT_FOUND)

        wage = serializer.save()
        return Response(WagePaymentSerializer(wage).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        wage_id, error = _parse_id(request.query_params.get("id"), "Wage")
        if error:
            return error

        wage = WagePayment.objects.filter(id=wage_id).first()
        if not wage:
            return Response({"detail": "Wage entry not found"}, status=status.HTTP_404_NOT_FOUND)
        wage.delete()
        return Response({"success": True})


# --------------------------------
# Attendance
# --------------------------------

class AttendanceView(APIView):
    failure_message = {
        "GET": "Failed to fetch attendance",
        "POST": "Failed to set attendance",
        "PATCH": "Failed to update attendance",
        "DELETE": "Failed to delete attendance",
    }

    def get(self, request):
        query = RequiredDateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        staff = Staff.objects.filter(active=True).order_by("name", "id")
        records = _apply_date_range(AttendanceRecord.objects.all(), query.validated_data).order_by(
            "date", "staff_id"
        )
        return Response(
            {
                "staff": StaffSerializer(staff, many=True).data,
                "attendance": AttendanceSerializer(records, many=True).data,
            }
        )

    def post(self, request):
        serializer = AttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if not Staff.objects.filter(id=data["staff_id"]).exists():
            return Response({"detail": "Staff member not found"}, status=status.HTTP_404_NOT_FOUND)

        with transaction.atomic():
            existing = (
                AttendanceRecord.objects.select_for_update()
                .filter(staff_id=data["staff_id"], date=data["date"])
                .order_by("id")
                .first()
            )
            if existing:
                existing.status = data["status"]
                existing.save(update_fields=["status"])
                return Response(AttendanceSerializer(existing).data)

            record = serializer.save()
        return Response(AttendanceSerializer(record).data, status=status.HTTP_201_CREATED)

    def patch(self, request):
        serializer = AttendanceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        record = AttendanceRecord.objects.filter(id=serializer.validated_data["id"]).first()
        if not record:
            return Response({"detail": "Attendance record not found"}, status=status.HTTP_404_NOT_FOUND)
        record.status = serializer.validated_data["status"]
        record.save(update_fields=["status"])
        return Response(AttendanceSerializer(record).data)

    def delete(self, request):
        staff_id = request.query_params.get("staffId")
        date = request.query_params.get("date")
        if not staff_id or not date:
            return Response({"detail": "staffId and date are required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            staff_id = int(staff_id)
        except ValueError:
            return Response({"detail": "Invalid staffId"}, status=status.HTTP_400_BAD_REQUEST)
        if not is_valid_date(date):
            return Response(
                {"detail": "Invalid date format. Use YYYY-MM-DD"}, status=status.HTTP_400_BAD_REQUEST
            )

        record = AttendanceRecord.objects.filter(staff_id=staff_id, date=date).first()
        if not record:
            return Response({"detail": "Attendance record not found"}, status=status.HTTP_404_NOT_FOUND)
        record.delete()
        return Response({"success": True})


# --------------------------------
# Daily balance
# --------------------------------

class BalanceView(APIView):
    failure_message = {
        "GET": "Failed to get daily balance",
        "POST": "Failed to save daily balance",
    }

    def get(self, request):
        date = request.query_params.get("date")
        if not date:
            return Response({"detail": "Date parameter is required"}, status=status.HTTP_400_BAD_REQUEST)
        if not is_valid_date(date):
            return Response(
                {"detail": "Invalid date format. Use YYYY-MM-DD"}, status=status.HTTP_400_BAD_REQUEST
            )

        balance = DailyBalance.objects.filter(date=date).first()
        if not balance:
            return Response({"date": date, "openingBalance": None, "closingBalance": None})
        return Response(BalanceSerializer(balance).data)

    def post(self, request):
        serializer = BalanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        with transaction.atomic():
            balance = DailyBalance.objects.select_for_update().filter(date=data["date"]).first()
            if balance:
                # Only the supplied balances change.
                update_fields = [key for key in ("opening_balance", "closing_balance") if key in data]
                for key in update_fields:
                    setattr(balance, key, data[key])
                balance.save(update_fields=update_fields)
                return Response(BalanceSerializer(balance).data)

            if "opening_balance" not in data:
                return Response(
                    {"detail": "openingBalance is required for new records"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            balance = serializer.save()
        return Response(BalanceSerializer(balance).data)
