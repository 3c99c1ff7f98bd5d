from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from utils.dates import parse_iso_date

from .services import daily_summary


class DashboardView(APIView):
    failure_message = "Failed to fetch dashboard data"

    def get(self, request):
        raw = request.query_params.get("date")
        if raw:
            day = parse_iso_date(raw)
            if day is None:
                return Response(
                    {"detail": "Invalid date format. Use YYYY-MM-DD"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
        else:
            day = timezone.localdate()

        return Response(daily_summary(day))
