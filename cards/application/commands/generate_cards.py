"""
GenerateCardsCommand.

Command to generate a batch of unused cards.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class GenerateCardsCommand:
    """Command to generate `count` cards sharing one batch id."""

    count: int
    description: str = ""
    expired_at: Optional[datetime] = None
