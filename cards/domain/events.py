"""
Card domain events.

Domain events represent something that happened in the card domain.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class CardBatchGenerated(DomainEvent):
    """Event raised when a batch of cards is generated."""

    batch_id: str
    created_count: int
    failed_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "batch_id": self.batch_id,
                "created_count": self.created_count,
                "failed_count": self.failed_count,
            }
        )
        return data


@dataclass(frozen=True, kw_only=True)
class CardBound(DomainEvent):
    """Event raised when a card is bound to a device on first use."""

    card_key: str
    hwid: str
    expired_at: datetime
    persisted: bool = True

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "card_key": self.card_key,
                "hwid": self.hwid,
                "expired_at": self.expired_at.isoformat(),
                "persisted": self.persisted,
            }
        )
        return data


@dataclass(frozen=True, kw_only=True)
class CardVerified(DomainEvent):
    """Event raised when an already bound card is verified again."""

    card_key: str
    hwid: str


@dataclass(frozen=True, kw_only=True)
class CardVerificationRejected(DomainEvent):
    """Event raised when a verify request is refused."""

    card_key: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"card_key": self.card_key, "reason": self.reason})
        return data


@dataclass(frozen=True, kw_only=True)
class CardsExpired(DomainEvent):
    """Event raised when cards are moved to the expired status."""

    card_ids: Tuple[str, ...] = field(default_factory=tuple)
    source: str = "sweep"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"card_ids": list(self.card_ids), "source": self.source})
        return data


@dataclass(frozen=True, kw_only=True)
class CardUnbound(DomainEvent):
    """Event raised when an administrator releases a card from its device."""

    card_key: str
    previous_hwid: Optional[str] = None
