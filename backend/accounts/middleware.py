from django.conf import settings
from django.shortcuts import redirect


def is_protected_path(path: str, prefixes) -> bool:
    for prefix in prefixes:
        prefix = prefix.rstrip("/")
        if path == prefix or path.startswith(f"{prefix}/"):
            return True
    return False


class SessionGateMiddleware:
    """
    Redirect owner pages to the login page when the session cookie is missing.

    Only the cookie's presence is checked; the token itself is never looked up.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if is_protected_path(request.path, settings.SESSION_GATE_PREFIXES):
            if not request.COOKIES.get(settings.SESSION_GATE_COOKIE):
                return redirect(settings.SESSION_GATE_LOGIN_URL)
        return self.get_response(request)
