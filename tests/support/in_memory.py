"""
In-memory test doubles for the card ports.
"""

import asyncio
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

from cards.domain.card import Card
from cards.ports.card_repository import CardPage, CardRepository
from cards.ports.expiry_dispatcher import ExpiryDispatcher
from core.domain.exceptions import DuplicateCardKeyError, StoreFailureError
from core.domain.value_objects import CardStatus
from software.domain.software_version import SoftwareVersion
from software.ports.software_version_repository import SoftwareVersionRepository


class InMemoryCardRepository(CardRepository):
    """
    Dictionary-backed CardRepository.

    Reads yield to the event loop before returning so concurrent handlers
    interleave; bind_if_unused checks and writes without yielding, like a
    single conditional UPDATE.
    """

    def __init__(self):
        self.cards: Dict[uuid.UUID, Card] = {}
        self.failing: Set[str] = set()
        self.calls: List[str] = []

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failing:
            raise StoreFailureError()

    def add(self, card: Card) -> Card:
        self.cards[card.id] = card
        return card

    async def create(self, card: Card) -> Card:
        await asyncio.sleep(0)
        self._enter("create")
        if any(existing.key == card.key for existing in self.cards.values()):
            raise DuplicateCardKeyError(context={"key": card.key})
        return self.add(card)

    async def save(self, card: Card) -> Card:
        await asyncio.sleep(0)
        self._enter("save")
        self.cards[card.id] = card
        return card

    async def find_by_id(self, card_id: uuid.UUID) -> Optional[Card]:
        await asyncio.sleep(0)
        self._enter("find_by_id")
        return self.cards.get(card_id)

    async def find_by_key(self, key: str) -> Optional[Card]:
        await asyncio.sleep(0)
        self._enter("find_by_key")
        return next((c for c in self.cards.values() if c.key == key), None)

    async def find_by_hwid(self, hwid: str) -> List[Card]:
        await asyncio.sleep(0)
        self._enter("find_by_hwid")
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        matches = [c for c in self.cards.values() if c.hwid == hwid]
        return sorted(matches, key=lambda c: c.used_at or oldest, reverse=True)

    async def bind_if_unused(self, card: Card) -> bool:
        await asyncio.sleep(0)
        self._enter("bind_if_unused")
        stored = self.cards.get(card.id)
        if stored is None or stored.status != CardStatus.UNUSED:
            return False
        self.cards[card.id] = card
        return True

    async def find_expired_candidates(self, now: datetime, limit: int = 1000) -> List[Card]:
        await asyncio.sleep(0)
        self._enter("find_expired_candidates")
        due = [
            c
            for c in self.cards.values()
            if c.status != CardStatus.EXPIRED and c.expired_at is not None and c.expired_at < now
        ]
        return sorted(due, key=lambda c: c.expired_at)[:limit]

    async def mark_expired_if_due(self, card_id: uuid.UUID, now: datetime) -> bool:
        await asyncio.sleep(0)
        self._enter("mark_expired_if_due")
        stored = self.cards.get(card_id)
        if stored is None or stored.status == CardStatus.EXPIRED:
            return False
        if stored.expired_at is None or stored.expired_at >= now:
            return False
        self.cards[card_id] = replace(stored, status=CardStatus.EXPIRED)
        return True

    async def list_cards(
        self,
        status: Optional[CardStatus] = None,
        batch_id: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> CardPage:
        await asyncio.sleep(0)
        self._enter("list_cards")
        matches = [
            c
            for c in self.cards.values()
            if (status is None or c.status == status) and (batch_id is None or c.batch_id == batch_id)
        ]
        matches.sort(key=lambda c: (c.created_at, str(c.id)), reverse=True)
        offset = (page - 1) * limit
        return CardPage(docs=matches[offset : offset + limit], total_docs=len(matches), page=page, limit=limit)


class RecordingExpiryDispatcher(ExpiryDispatcher):
    """ExpiryDispatcher that records dispatched card ids."""

    def __init__(self):
        self.dispatched: List[uuid.UUID] = []

    async def dispatch(self, card_id: uuid.UUID, now: datetime) -> None:
        self.dispatched.append(card_id)


class InMemorySoftwareVersionRepository(SoftwareVersionRepository):
    """SoftwareVersionRepository holding at most one version."""

    def __init__(self, current: Optional[SoftwareVersion] = None):
        self.current = current

    async def get(self) -> Optional[SoftwareVersion]:
        await asyncio.sleep(0)
        return self.current
