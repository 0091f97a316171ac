"""
Card DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from cards.domain.card import Card


@dataclass
class CardDTO:
    """DTO for card information."""

    id: uuid.UUID
    key: str
    status: str
    description: str
    hwid: Optional[str]
    used_at: Optional[datetime]
    bind_at: Optional[datetime]
    expired_at: Optional[datetime]
    batch_id: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, card: Card) -> "CardDTO":
        return cls(
            id=card.id,
            key=card.key,
            status=card.status.value,
            description=card.description,
            hwid=card.hwid,
            used_at=card.used_at,
            bind_at=card.bind_at,
            expired_at=card.expired_at,
            batch_id=card.batch_id,
            created_at=card.created_at,
            updated_at=card.updated_at,
        )


@dataclass
class FailedCardDTO:
    """DTO for a card that could not be created."""

    key: str
    code: str
    message: str


@dataclass
class GenerateCardsResultDTO:
    """DTO for generate cards response."""

    batch_id: str
    cards: List[CardDTO]
    failed: List[FailedCardDTO] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.failed)


@dataclass
class VerifyCardResultDTO:
    """DTO for a successful verification."""

    card: CardDTO
    server_time: datetime
    first_use: bool = False


@dataclass
class ExpiredCardDTO:
    """DTO for a card moved to expired by a sweep."""

    id: uuid.UUID
    key: str
    expired_at: Optional[datetime]


@dataclass
class SweepResultDTO:
    """DTO for sweep response."""

    updated_count: int
    expired_cards: List[ExpiredCardDTO]


@dataclass
class PaginationDTO:
    """DTO for list pagination information."""

    page: int
    limit: int
    total_pages: int
    total_docs: int
    has_next_page: bool
    has_prev_page: bool


@dataclass
class CardListDTO:
    """DTO for list cards response."""

    cards: List[CardDTO]
    pagination: PaginationDTO


@dataclass
class HwidCardDTO:
    """DTO for a card in a HWID inspection."""

    card: CardDTO
    is_valid: bool


@dataclass
class CheckHwidResultDTO:
    """DTO for check HWID response."""

    hwid: str
    bound: bool
    total_cards: int
    valid_cards: int
    cards: List[HwidCardDTO]
