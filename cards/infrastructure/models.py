"""
Card model.
"""
import uuid

from django.db import models
from django.utils import timezone


class Card(models.Model):
    """
    A license card that can be bound to a single hardware device.
    """

    STATUS_CHOICES = [
        ("unused", "Unused"),
        ("used", "Used"),
        ("expired", "Expired"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=64, unique=True)
    status = models.CharField(
        max_length=10, choices=STATUS_CHOICES, default="unused", db_index=True
    )
    description = models.TextField(blank=True, default="")
    hwid = models.CharField(
        max_length=32, null=True, blank=True, db_index=True, help_text="Bound device fingerprint"
    )
    used_at = models.DateTimeField(null=True, blank=True)
    bind_at = models.DateTimeField(null=True, blank=True)
    expired_at = models.DateTimeField(null=True, blank=True, db_index=True)
    batch_id = models.CharField(max_length=36, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "cards"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "expired_at"], name="cards_status_expired_idx"),
        ]

    def __str__(self):
        return self.key

    @property
    def is_valid(self) -> bool:
        """
        Check if card is currently usable.

        Returns:
            True if status is not expired and expiry is not in the past
        """
        if self.status == "expired":
            return False
        if self.expired_at and self.expired_at < timezone.now():
            return False
        return True
