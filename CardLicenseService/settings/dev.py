"""
Development settings for CardLicenseService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Database - Use PostgreSQL in Docker, SQLite for local development
# Override with environment variable DB_ENGINE=sqlite for SQLite
if os.environ.get("DB_ENGINE") == "sqlite":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
        }
    }

# Admin API access for local tooling; digest of "dev-admin-key"
if not CARDS_ADMIN_API_KEYS:  # noqa: F405
    CARDS_ADMIN_API_KEYS = [
        "df76ff796f70d2c9cb055ea6280553caa27eda26b70e01082c160de75a05a4a9"
    ]

# Run Celery tasks in-process unless a broker is configured
CELERY_TASK_ALWAYS_EAGER = os.environ.get("CELERY_BROKER_URL") is None
