"""
Django admin configuration for software app.
"""
import logging

from django.contrib import admin

from software.infrastructure.models import SINGLETON_ID, SoftwareVersion

logger = logging.getLogger(__name__)


@admin.register(SoftwareVersion)
class SoftwareVersionAdmin(admin.ModelAdmin):
    """Admin interface for the singleton SoftwareVersion."""

    list_display = ["version", "app_status", "published_at", "updated_at"]
    readonly_fields = ["updated_at"]
    fields = ["version", "app_status", "description", "published_at", "updated_at"]

    def has_add_permission(self, request):
        return not SoftwareVersion.objects.filter(pk=SINGLETON_ID).exists()

    def has_delete_permission(self, request, obj=None):
        return False

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        logger.info(
            "Software version %s configuration updated (app_status=%s)",
            obj.version,
            obj.app_status,
        )
