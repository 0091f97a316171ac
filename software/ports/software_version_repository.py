"""
Software version repository port.
"""
from abc import ABC, abstractmethod
from typing import Optional

from software.domain.software_version import SoftwareVersion


class SoftwareVersionRepository(ABC):
    """Abstract repository for the singleton software version."""

    @abstractmethod
    async def get(self) -> Optional[SoftwareVersion]:
        """
        Load the published software version.

        Returns:
            SoftwareVersion or None if nothing was published yet
        """
        pass
