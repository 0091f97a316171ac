"""
Base Django settings for CardLicenseService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-card-license-service-change-me-in-production"
)

DEBUG = False

ALLOWED_HOSTS = []

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "CardLicenseService.apps.CardLicenseServiceConfig",
    "core",
    "cards",
    "software",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.metrics.MetricsMiddleware",
    "core.middleware.auth.AdminCapabilityMiddleware",
]

ROOT_URLCONF = "CardLicenseService.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "CardLicenseService.wsgi.application"
ASGI_APPLICATION = "CardLicenseService.asgi.application"

# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "card_license_service"),
        "USER": os.environ.get("DB_USER", "postgres"),
        "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "Card License Service API",
    "DESCRIPTION": (
        "Issues license cards, binds each card to a single hardware device "
        "on first verification and manages card expiry."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "Cards", "description": "Card generation, verification and administration"},
        {"name": "Software", "description": "Published client version"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
    "APPEND_COMPONENTS": {
        "securitySchemes": {
            "AdminKeyAuth": {
                "type": "apiKey",
                "in": "header",
                "name": "X-Admin-Key",
                "description": "Admin API key for card administration endpoints.",
            }
        }
    },
}

# Cards
CARD_EXPIRY_DAYS = int(os.environ.get("CARD_EXPIRY_DAYS", "30"))
CARDS_MAX_BATCH_SIZE = int(os.environ.get("CARDS_MAX_BATCH_SIZE", "1000"))
CARDS_SWEEP_BATCH_SIZE = int(os.environ.get("CARDS_SWEEP_BATCH_SIZE", "1000"))
CARDS_DEFAULT_PAGE_SIZE = int(os.environ.get("CARDS_DEFAULT_PAGE_SIZE", "10"))
CARDS_MAX_PAGE_SIZE = int(os.environ.get("CARDS_MAX_PAGE_SIZE", "100"))
# "accept": a used card with no bound device verifies as a repeat; "reject": CARD_ALREADY_USED
CARDS_UNBOUND_USED_POLICY = os.environ.get("CARDS_UNBOUND_USED_POLICY", "accept")
# SHA-256 hex digests of admin API keys, comma separated
CARDS_ADMIN_API_KEYS = [
    digest.strip().lower()
    for digest in os.environ.get("CARDS_ADMIN_API_KEYS", "").split(",")
    if digest.strip()
]
CARDS_ADMIN_UNBIND_KEY = os.environ.get("CARDS_ADMIN_UNBIND_KEY", "")
CARDS_SWEEP_INTERVAL_SECONDS = int(os.environ.get("CARDS_SWEEP_INTERVAL_SECONDS", "3600"))

# Celery
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", None)
CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_IGNORE_RESULT = True
CELERY_TIMEZONE = TIME_ZONE
CELERY_BEAT_SCHEDULE = {
    "sweep-expired-cards": {
        "task": "core.tasks.sweep_expired_cards_task",
        "schedule": float(CARDS_SWEEP_INTERVAL_SECONDS),
    },
}

# Observability
OTEL_ENABLED = os.environ.get("OTEL_ENABLED", "false").lower() == "true"

LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "development"))
