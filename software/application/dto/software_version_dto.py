"""
Software version DTO for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from software.domain.software_version import SoftwareVersion


@dataclass
class SoftwareVersionDTO:
    """DTO for the published software version."""

    version: str
    app_status: bool
    description: str
    published_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, entity: SoftwareVersion) -> "SoftwareVersionDTO":
        return cls(
            version=entity.version,
            app_status=entity.app_status,
            description=entity.description,
            published_at=entity.published_at,
            updated_at=entity.updated_at,
        )
