"""WSGI entry point for gunicorn / uwsgi."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "edupaper_platform.settings")

application = get_wsgi_application()
