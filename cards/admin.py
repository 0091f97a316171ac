"""
Django admin configuration for cards app.
"""
from asgiref.sync import async_to_sync
from django.contrib import admin, messages
from django.utils.html import format_html

from cards.application.commands.sweep_expired_cards import SweepExpiredCardsCommand
from cards.application.handlers.sweep_expired_cards_handler import SweepExpiredCardsHandler
from cards.application.handlers.unbind_card_handler import UnbindCardHandler
from cards.infrastructure.models import Card
from cards.infrastructure.repositories.django_card_repository import DjangoCardRepository
from core.domain.exceptions import CardNotBoundError, CardNotFoundError


@admin.register(Card)
class CardAdmin(admin.ModelAdmin):
    """Admin interface for Card model."""

    list_display = [
        "key",
        "status_display",
        "hwid",
        "batch_id",
        "used_at",
        "expired_at",
        "created_at",
    ]
    list_filter = ["status", "created_at", "expired_at"]
    search_fields = ["key", "hwid", "batch_id", "description"]
    readonly_fields = ["id", "key", "batch_id", "created_at", "updated_at"]
    actions = ["unbind_cards", "expire_due_cards"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key", "status", "description", "batch_id"),
            },
        ),
        (
            "Binding",
            {
                "fields": ("hwid", "used_at", "bind_at", "expired_at"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "unused": "green",
            "used": "blue",
            "expired": "gray",
        }
        color = colors.get(obj.status, "black")
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def unbind_cards(self, request, queryset):
        """Release the selected cards from their devices."""
        handler = UnbindCardHandler(card_repository=DjangoCardRepository())
        released = 0
        for card_id in queryset.exclude(hwid__isnull=True).values_list("id", flat=True):
            try:
                async_to_sync(handler.release)(card_id)
            except (CardNotBoundError, CardNotFoundError):
                continue
            released += 1
        self.message_user(request, f"Unbound {released} card(s)", messages.SUCCESS)

    unbind_cards.short_description = "Unbind selected cards"

    def expire_due_cards(self, request, queryset):
        """Run the expiry sweep over all cards."""
        handler = SweepExpiredCardsHandler(card_repository=DjangoCardRepository())
        result = async_to_sync(handler.handle)(SweepExpiredCardsCommand(source="admin"))
        self.message_user(
            request, f"Marked {result.updated_count} card(s) as expired", messages.SUCCESS
        )

    expire_due_cards.short_description = "Run expiry sweep"
