"""
App configuration for Card License Service.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

SKIPPED_COMMANDS = {"migrate", "makemigrations", "collectstatic", "check"}


class CardLicenseServiceConfig(AppConfig):
    """App configuration for CardLicenseService."""

    name = "CardLicenseService"
    verbose_name = "Card License Service"

    def ready(self):
        """Called when Django starts."""
        if len(sys.argv) > 1 and sys.argv[1] in SKIPPED_COMMANDS:
            return

        # Django's autoreloader parent process
        if os.environ.get("RUN_MAIN") == "false":
            return

        if getattr(self, "_initialized", False):
            return

        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()
        register_event_handlers()
        self._initialized = True
        logger.info("Observability setup complete")
