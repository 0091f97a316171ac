"""
Integration tests for the software version model, admin and API.
"""

import pytest
from django.core.exceptions import ValidationError
from django.urls import reverse

from software.infrastructure.models import SoftwareVersion


@pytest.mark.django_db
@pytest.mark.integration
class TestSoftwareVersionModel:
    """Tests for the SoftwareVersion singleton model."""

    def test_saves_always_target_one_row(self):
        """Test repeated saves update the single record."""
        SoftwareVersion(version="1.0.0").save()
        SoftwareVersion(version="1.1.0").save()

        assert SoftwareVersion.objects.count() == 1
        assert SoftwareVersion.objects.get().version == "1.1.0"

    def test_invalid_version_fails_validation(self):
        """Test full_clean enforces semantic versioning."""
        with pytest.raises(ValidationError) as exc_info:
            SoftwareVersion(version="1.0").full_clean()
        assert "version" in exc_info.value.message_dict


@pytest.mark.django_db
@pytest.mark.integration
class TestSoftwareVersionAPI:
    """Integration tests for GET /api/v1/software-version."""

    def test_not_configured(self, api_client):
        """Test 404 before any version is published."""
        response = api_client.get(reverse("software-version"))
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SOFTWARE_VERSION_NOT_FOUND"

    def test_public_read(self, api_client):
        """Test the version is readable without credentials."""
        SoftwareVersion(version="2.0.0-rc.1", app_status=False, description="Release candidate").save()

        response = api_client.get(reverse("software-version"))

        assert response.status_code == 200
        data = response.json()
        assert data["version"] == "2.0.0-rc.1"
        assert data["appStatus"] is False
        assert data["description"] == "Release candidate"
        assert data["publishedAt"] is not None
        assert data["updatedAt"] is not None


@pytest.mark.django_db
@pytest.mark.integration
class TestSoftwareVersionAdmin:
    """Tests for the SoftwareVersion admin."""

    def test_admin_rejects_invalid_version(self, client, admin_user):
        """Test the admin form refuses a non-semantic version."""
        client.force_login(admin_user)

        response = client.post(
            reverse("admin:software_softwareversion_add"),
            {
                "version": "latest",
                "app_status": "on",
                "description": "",
                "published_at_0": "2024-05-01",
                "published_at_1": "10:00:00",
            },
        )

        assert response.status_code == 200
        assert SoftwareVersion.objects.count() == 0

    def test_admin_publishes_version(self, client, admin_user):
        """Test the admin form stores a valid version once."""
        client.force_login(admin_user)

        client.post(
            reverse("admin:software_softwareversion_add"),
            {
                "version": "1.4.0",
                "app_status": "on",
                "description": "New release",
                "published_at_0": "2024-05-01",
                "published_at_1": "10:00:00",
            },
        )

        assert SoftwareVersion.objects.get().version == "1.4.0"
        add_url = reverse("admin:software_softwareversion_add")
        assert client.get(add_url).status_code == 403
