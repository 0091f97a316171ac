"""
SweepExpiredCardsCommand.

Command to move every time-expired card to the expired status.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class SweepExpiredCardsCommand:
    """Command to sweep expired cards."""

    now: Optional[datetime] = None
    limit: int = 1000
    source: str = "sweep"
