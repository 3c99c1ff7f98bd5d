# backend/accounts/views.py
import logging
import secrets
from datetime import timedelta

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import AdminUser
from .serializers import LoginSerializer

LOGGER = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def generate_session_token() -> str:
    return secrets.token_hex(32)


class LoginView(APIView):
    failure_message = "Login failed"

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"detail": "Username and password are required"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        username = serializer.validated_data["username"]
        password = serializer.validated_data["password"]

        # Same answer for an unknown user and a wrong password.
        user = AdminUser.objects.filter(username=username).first()
        if user is None or not user.check_password(password):
            LOGGER.info("Rejected login for %r", username)
            return Response({"detail": INVALID_CREDENTIALS}, status=status.HTTP_401_UNAUTHORIZED)

        response = Response({"success": True, "user": {"id": user.id, "username": user.username}})
        response.set_cookie(
            settings.SESSION_GATE_COOKIE,
            generate_session_token(),
            max_age=int(timedelta(days=settings.SESSION_COOKIE_MAX_AGE_DAYS).total_seconds()),
            path="/",
            httponly=True,
            samesite="Lax",
            secure=not settings.DEBUG,
        )
        return response


class LogoutView(APIView):
    failure_message = "Logout failed"

    def post(self, request):
        response = Response({"success": True})
        response.delete_cookie(settings.SESSION_GATE_COOKIE, path="/", samesite="Lax")
        return response
