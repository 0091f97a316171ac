"""
Software version domain entity.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import SemanticVersion


@dataclass(frozen=True)
class SoftwareVersion:
    """
    Published client software version.

    There is a single version record. app_status switches the client
    application on or off for every user.
    """

    version: str
    app_status: bool = True
    description: str = ""
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate version format."""
        SemanticVersion(self.version)
