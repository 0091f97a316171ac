"""
ListCardsQuery.

Query to list cards with optional filters and pagination.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ListCardsQuery:
    """Query to list cards, newest first."""

    status: Optional[str] = None
    batch_id: Optional[str] = None
    page: int = 1
    limit: Optional[int] = None
