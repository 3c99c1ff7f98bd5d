import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "restaurant.settings")

# The kitchen order stream is an async view; serve it under ASGI (uvicorn restaurant.asgi:application).
application = get_asgi_application()
