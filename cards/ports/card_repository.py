"""
Card repository port (interface).

This defines the contract for card persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from cards.domain.card import Card
from core.domain.value_objects import CardStatus


@dataclass(frozen=True)
class CardPage:
    """One page of a filtered card listing."""

    docs: List[Card] = field(default_factory=list)
    total_docs: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return -(-self.total_docs // self.limit) if self.limit else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1


class CardRepository(ABC):
    """
    Abstract repository for Card entities.

    Implementations raise StoreFailureError when the underlying
    store is unavailable.
    """

    @abstractmethod
    async def create(self, card: Card) -> Card:
        """
        Insert a new card.

        Args:
            card: Card entity to insert

        Returns:
            Persisted card entity

        Raises:
            DuplicateCardKeyError: If the key already exists
            StoreFailureError: If the store rejects the write
        """
        pass

    @abstractmethod
    async def save(self, card: Card) -> Card:
        """
        Save the mutable fields of an existing card.

        Args:
            card: Card entity to save

        Returns:
            Saved card entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, card_id: uuid.UUID) -> Optional[Card]:
        """
        Find a card by ID.

        Args:
            card_id: Card UUID

        Returns:
            Card entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[Card]:
        """
        Find a card by its key.

        Args:
            key: Card key (exact match)

        Returns:
            Card entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_hwid(self, hwid: str) -> List[Card]:
        """
        Find all cards bound to a device, most recently used first.

        Args:
            hwid: Normalised hardware id

        Returns:
            List of Card entities
        """
        pass

    @abstractmethod
    async def bind_if_unused(self, card: Card) -> bool:
        """
        Persist a first-use binding only if the stored card is still unused.

        Writes status, hwid, used_at, bind_at and expired_at in a single
        conditional update.

        Args:
            card: Card entity already carrying the binding

        Returns:
            True if this call performed the transition, False if the
            stored card was no longer unused
        """
        pass

    @abstractmethod
    async def find_expired_candidates(
        self, now: datetime, limit: int = 1000
    ) -> List[Card]:
        """
        Find cards whose expiry has passed but whose status is not expired.

        Args:
            now: Reference time
            limit: Maximum number of cards, oldest expiry first

        Returns:
            List of Card entities
        """
        pass

    @abstractmethod
    async def mark_expired_if_due(self, card_id: uuid.UUID, now: datetime) -> bool:
        """
        Set status to expired if the card is not already expired and its
        expiry is before now. Only the status changes.

        Args:
            card_id: Card UUID
            now: Reference time

        Returns:
            True if a row was updated
        """
        pass

    @abstractmethod
    async def list_cards(
        self,
        status: Optional[CardStatus] = None,
        batch_id: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> CardPage:
        """
        List cards matching all given filters, newest first.

        Args:
            status: Optional status filter
            batch_id: Optional batch filter
            page: 1-based page number
            limit: Page size

        Returns:
            CardPage
        """
        pass
