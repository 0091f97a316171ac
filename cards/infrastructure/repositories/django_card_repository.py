"""
Django implementation of CardRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError
from django.db.models import F

from cards.domain.card import Card
from cards.infrastructure.models import Card as CardModel
from cards.ports.card_repository import CardPage, CardRepository
from core.domain.exceptions import (
    CardNotFoundError,
    DuplicateCardKeyError,
    StoreFailureError,
)
from core.domain.value_objects import CardStatus
from core.infrastructure.database import translate_database_errors

logger = logging.getLogger(__name__)


class DjangoCardRepository(CardRepository):
    """
    Django ORM implementation of CardRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Uses conditional updates for state transitions
    """

    def _to_domain(self, model: CardModel) -> Card:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Card model

        Returns:
            Card domain entity
        """
        return Card(
            id=model.id,
            key=model.key,
            status=CardStatus(model.status),
            batch_id=model.batch_id,
            description=model.description,
            hwid=model.hwid,
            used_at=model.used_at,
            bind_at=model.bind_at,
            expired_at=model.expired_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: CardModel, card: Card) -> CardModel:
        """Copy the mutable fields of a domain entity onto a model."""
        model.status = card.status.value
        model.description = card.description
        model.hwid = card.hwid
        model.used_at = card.used_at
        model.bind_at = card.bind_at
        model.expired_at = card.expired_at
        return model

    @sync_to_async
    def create(self, card: Card) -> Card:
        """
        Insert a new card.

        Args:
            card: Card entity to insert

        Returns:
            Persisted card entity
        """
        model = self._apply(CardModel(id=card.id, key=card.key, batch_id=card.batch_id), card)
        try:
            model.save(force_insert=True)
        except IntegrityError as e:
            logger.warning("Duplicate card key rejected: %s", card.key)
            raise DuplicateCardKeyError(context={"key": card.key}) from e
        except DatabaseError as e:
            logger.error("Card store failure during create: %s", e, exc_info=True)
            raise StoreFailureError() from e
        return self._to_domain(model)

    @sync_to_async
    def save(self, card: Card) -> Card:
        """
        Save the mutable fields of an existing card.

        Args:
            card: Card entity to save

        Returns:
            Saved card entity
        """
        with translate_database_errors("save"):
            try:
                model = CardModel.objects.get(id=card.id)
            except CardModel.DoesNotExist:
                raise CardNotFoundError()
            self._apply(model, card).save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, card_id: uuid.UUID) -> Optional[Card]:
        """
        Find a card by ID.

        Args:
            card_id: Card UUID

        Returns:
            Card entity or None if not found
        """
        with translate_database_errors("find_by_id"):
            try:
                model = CardModel.objects.get(id=card_id)
            except CardModel.DoesNotExist:
                return None
        return self._to_domain(model)

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[Card]:
        """
        Find a card by its key.

        Args:
            key: Card key

        Returns:
            Card entity or None if not found
        """
        with translate_database_errors("find_by_key"):
            try:
                model = CardModel.objects.get(key=key)
            except CardModel.DoesNotExist:
                return None
        return self._to_domain(model)

    @sync_to_async
    def find_by_hwid(self, hwid: str) -> List[Card]:
        with translate_database_errors("find_by_hwid"):
            models = list(
                CardModel.objects.filter(hwid=hwid.lower()).order_by(
                    F("used_at").desc(nulls_last=True), "-id"
                )
            )
        return [self._to_domain(m) for m in models]

    @sync_to_async
    def bind_if_unused(self, card: Card) -> bool:
        """
        Persist a first-use binding with a compare-and-set on status.

        Args:
            card: Card entity already carrying the binding

        Returns:
            True if exactly one row changed
        """
        with translate_database_errors("bind_if_unused"):
            updated = CardModel.objects.filter(id=card.id, status="unused").update(
                status=card.status.value,
                hwid=card.hwid,
                used_at=card.used_at,
                bind_at=card.bind_at,
                expired_at=card.expired_at,
                updated_at=card.updated_at or card.bind_at,
            )
        return updated == 1

    @sync_to_async
    def find_expired_candidates(
        self, now: datetime, limit: int = 1000
    ) -> List[Card]:
        """
        Find cards past their expiry whose status is not yet expired.

        Args:
            now: Reference time
            limit: Maximum number of cards

        Returns:
            List of Card entities, oldest expiry first
        """
        with translate_database_errors("find_expired_candidates"):
            models = list(
                CardModel.objects.filter(expired_at__lt=now)
                .exclude(status="expired")
                .order_by("expired_at", "id")[:limit]
            )
        return [self._to_domain(m) for m in models]

    @sync_to_async
    def mark_expired_if_due(self, card_id: uuid.UUID, now: datetime) -> bool:
        """
        Conditionally move a card to expired.

        Args:
            card_id: Card UUID
            now: Reference time

        Returns:
            True if a row was updated
        """
        with translate_database_errors("mark_expired_if_due"):
            updated = (
                CardModel.objects.filter(id=card_id, expired_at__lt=now)
                .exclude(status="expired")
                .update(status="expired", updated_at=now)
            )
        return updated == 1

    @sync_to_async
    def list_cards(
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
        queryset = CardModel.objects.all()
        if status is not None:
            queryset = queryset.filter(status=status.value)
        if batch_id:
            queryset = queryset.filter(batch_id=batch_id)

        offset = (page - 1) * limit
        with translate_database_errors("list_cards"):
            total = queryset.count()
            models = list(queryset.order_by("-created_at", "-id")[offset : offset + limit])

        return CardPage(
            docs=[self._to_domain(m) for m in models],
            total_docs=total,
            page=page,
            limit=limit,
        )
