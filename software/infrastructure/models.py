"""
Software version model.
"""
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from core.domain.value_objects import SemanticVersion

SINGLETON_ID = 1


def validate_semantic_version(value: str) -> None:
    """Field validator wrapping the SemanticVersion value object."""
    try:
        SemanticVersion(value)
    except ValueError as e:
        raise ValidationError(str(e))


class SoftwareVersion(models.Model):
    """
    Singleton holding the currently published client version.

    Every save writes the same row.
    """

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID, editable=False)
    version = models.CharField(
        max_length=64,
        validators=[validate_semantic_version],
        help_text="Semantic version, e.g. 1.0.0 or 1.2.3-beta.1",
    )
    app_status = models.BooleanField(default=True, help_text="Whether the application is enabled")
    description = models.TextField(blank=True, default="", help_text="Main changes in this version")
    published_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "software_version"
        verbose_name = "software version"
        verbose_name_plural = "software version"

    def __str__(self):
        return self.version

    def save(self, *args, **kwargs):
        self.pk = SINGLETON_ID
        super().save(*args, **kwargs)
