"""WSGI entrypoint for the WorkPulse API."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'workpulse.settings')

application = get_wsgi_application()
