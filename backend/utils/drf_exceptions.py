import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

LOGGER = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Internal server error"


def custom_exception_handler(exc, context):
    """
    Turn anything DRF does not know about (store errors, bugs) into a generic
    JSON 500 carrying the view's ``failure_message``. Nothing internal leaks.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    request = context.get("request")
    if request is not None:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.get_full_path())
    else:
        LOGGER.exception("Unhandled error (no request in context)")

    view = context.get("view")
    message = getattr(view, "failure_message", None) or DEFAULT_FAILURE_MESSAGE
    if isinstance(message, dict):
        method = request.method if request is not None else ""
        message = message.get(method) or DEFAULT_FAILURE_MESSAGE

    return Response({"detail": message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
