"""
GetSoftwareVersionHandler.

Handles the public software version lookup.
"""

from core.domain.exceptions import SoftwareVersionNotConfiguredError
from software.application.dto.software_version_dto import SoftwareVersionDTO
from software.ports.software_version_repository import SoftwareVersionRepository


class GetSoftwareVersionHandler:
    """Handler for the software version lookup."""

    def __init__(self, software_version_repository: SoftwareVersionRepository):
        """Initialize handler with repository."""
        self.software_version_repository = software_version_repository

    async def handle(self) -> SoftwareVersionDTO:
        """
        Return the published software version.

        Raises:
            SoftwareVersionNotConfiguredError: If no version was published
        """
        entity = await self.software_version_repository.get()
        if entity is None:
            raise SoftwareVersionNotConfiguredError()
        return SoftwareVersionDTO.from_entity(entity)
