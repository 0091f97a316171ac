"""
Card domain entity.

A card is a single license key that can be bound to exactly one
hardware device. The entity holds the lifecycle rules; persistence
lives in the infrastructure layer.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from core.domain.exceptions import CardNotBoundError
from core.domain.value_objects import (
    CARD_KEY_MAX_LENGTH,
    HWID_PATTERN,
    CardStatus,
)

DEFAULT_EXPIRY_DAYS = 30


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Card:
    """
    Card domain entity.

    Immutable; state transitions return a new Card instance.
    """

    id: uuid.UUID
    key: str
    status: CardStatus
    batch_id: str
    description: str = ""
    hwid: Optional[str] = None
    used_at: Optional[datetime] = None
    bind_at: Optional[datetime] = None
    expired_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate card entity."""
        if not self.key:
            raise ValueError("Card key is required")
        if len(self.key) > CARD_KEY_MAX_LENGTH:
            raise ValueError(f"Card key must be at most {CARD_KEY_MAX_LENGTH} characters")
        if self.hwid is not None and not HWID_PATTERN.fullmatch(self.hwid):
            raise ValueError("HWID must be 32 hexadecimal characters")

    @classmethod
    def create(
        cls,
        key: str,
        batch_id: str,
        description: str = "",
        expired_at: Optional[datetime] = None,
        card_id: Optional[uuid.UUID] = None,
    ) -> "Card":
        """
        Create a new unused Card.

        Args:
            key: Card key
            batch_id: Batch the card belongs to
            description: Free-text description
            expired_at: Optional explicit expiry
            card_id: Optional UUID (generated if not provided)

        Returns:
            Card entity instance
        """
        now = utcnow()
        return cls(
            id=card_id or uuid.uuid4(),
            key=key,
            status=CardStatus.UNUSED,
            batch_id=batch_id,
            description=description,
            expired_at=expired_at,
            created_at=now,
            updated_at=now,
        )

    def is_time_expired(self, now: datetime) -> bool:
        """True if the card has an expiry that lies in the past."""
        return self.expired_at is not None and self.expired_at < now

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """
        Check if card is currently usable.

        Args:
            now: Current time (defaults to utcnow)

        Returns:
            True if status is not expired and expiry is not in the past
        """
        if self.status == CardStatus.EXPIRED:
            return False
        return not self.is_time_expired(now or utcnow())

    def is_bound_to(self, hwid: str) -> bool:
        return self.hwid is not None and self.hwid == hwid.lower()

    def bind(
        self,
        hwid: str,
        now: datetime,
        expiry_days: int = DEFAULT_EXPIRY_DAYS,
    ) -> "Card":
        """
        Bind an unused card to a device.

        Args:
            hwid: Normalised hardware id
            now: Binding time, used for used_at and bind_at
            expiry_days: Lifetime counted from the binding time

        Returns:
            New Card instance in used state
        """
        if self.status != CardStatus.UNUSED:
            raise ValueError("Only unused cards can be bound")
        return replace(
            self,
            status=CardStatus.USED,
            hwid=hwid.lower(),
            used_at=now,
            bind_at=now,
            expired_at=now + timedelta(days=expiry_days),
            updated_at=now,
        )

    def mark_expired(self, now: Optional[datetime] = None) -> "Card":
        """Return a copy with status expired. Other fields are kept."""
        return replace(self, status=CardStatus.EXPIRED, updated_at=now or utcnow())

    def unbind(self, now: Optional[datetime] = None) -> "Card":
        """
        Release the card from its device.

        Resets status to unused and clears hwid, used_at, bind_at and
        expired_at.

        Raises:
            CardNotBoundError: If no device is bound
        """
        if not self.hwid:
            raise CardNotBoundError()
        return replace(
            self,
            status=CardStatus.UNUSED,
            hwid=None,
            used_at=None,
            bind_at=None,
            expired_at=None,
            updated_at=now or utcnow(),
        )
