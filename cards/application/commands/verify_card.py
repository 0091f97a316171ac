"""
VerifyCardCommand.

Command to verify a card key for a device, binding it on first use.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class VerifyCardCommand:
    """
    Command to verify a card.

    key and hwid are validated by the handler before any lookup.
    """

    key: str
    hwid: str
    now: Optional[datetime] = None
