"""
Serializers for Software API endpoints.
"""

from rest_framework import serializers


class SoftwareVersionResponseSerializer(serializers.Serializer):
    """Serializer for SoftwareVersionDTO."""

    version = serializers.CharField()
    appStatus = serializers.BooleanField(source="app_status")
    description = serializers.CharField(allow_blank=True)
    publishedAt = serializers.DateTimeField(source="published_at", allow_null=True)
    updatedAt = serializers.DateTimeField(source="updated_at", allow_null=True)
