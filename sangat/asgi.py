"""
ASGI config for the sangat project.

Every request is plain HTTP; there are no websocket routes.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sangat.settings")

application = get_asgi_application()
