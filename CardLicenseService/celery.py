"""
Celery configuration for background tasks.

Used for lazy expiry writes and the periodic expiry sweep.
"""
import os

from celery import Celery

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "CardLicenseService.settings.dev")

app = Celery("CardLicenseService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Tasks live in core.tasks
app.autodiscover_tasks(["core"])
