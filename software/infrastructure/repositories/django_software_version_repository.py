"""
Django implementation of SoftwareVersionRepository port.
"""
from typing import Optional

from asgiref.sync import sync_to_async

from core.infrastructure.database import translate_database_errors
from software.domain.software_version import SoftwareVersion
from software.infrastructure.models import SINGLETON_ID
from software.infrastructure.models import SoftwareVersion as SoftwareVersionModel
from software.ports.software_version_repository import SoftwareVersionRepository


class DjangoSoftwareVersionRepository(SoftwareVersionRepository):
    """Django ORM implementation of SoftwareVersionRepository."""

    @sync_to_async
    def get(self) -> Optional[SoftwareVersion]:
        with translate_database_errors("get_software_version"):
            model = SoftwareVersionModel.objects.filter(pk=SINGLETON_ID).first()
        if model is None:
            return None
        return SoftwareVersion(
            version=model.version,
            app_status=model.app_status,
            description=model.description,
            published_at=model.published_at,
            updated_at=model.updated_at,
        )
