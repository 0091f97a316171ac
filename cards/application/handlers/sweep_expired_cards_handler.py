"""
SweepExpiredCardsHandler.

Moves cards whose expiry has passed to the expired status.
"""

import logging
import uuid
from datetime import datetime

from cards.application.commands.sweep_expired_cards import SweepExpiredCardsCommand
from cards.application.dto.card_dto import ExpiredCardDTO, SweepResultDTO
from cards.domain.card import utcnow
from cards.domain.events import CardsExpired
from cards.ports.card_repository import CardRepository
from core.domain.exceptions import StoreFailureError
from core.infrastructure.events import event_bus
from core.metrics import card_background_write_failures_total

logger = logging.getLogger(__name__)


class SweepExpiredCardsHandler:
    """
    Handler for SweepExpiredCardsCommand.

    Each card is updated by its own conditional write, so a sweep that
    overlaps another sweep or a lazy expiry stamp never double counts.
    """

    def __init__(self, card_repository: CardRepository):
        """Initialize handler with repository."""
        self.card_repository = card_repository

    async def handle(self, command: SweepExpiredCardsCommand) -> SweepResultDTO:
        """
        Handle sweep command.

        Args:
            command: SweepExpiredCardsCommand

        Returns:
            SweepResultDTO listing only the cards this run updated

        Raises:
            StoreFailureError: If candidates cannot be loaded
        """
        now = command.now or utcnow()
        candidates = await self.card_repository.find_expired_candidates(now, limit=command.limit)

        expired = []
        for card in candidates:
            try:
                updated = await self.card_repository.mark_expired_if_due(card.id, now)
            except StoreFailureError:
                card_background_write_failures_total.labels(operation="sweep").inc()
                logger.error("Failed to expire card %s during sweep", card.id, exc_info=True)
                continue
            if updated:
                expired.append(ExpiredCardDTO(id=card.id, key=card.key, expired_at=card.expired_at))

        logger.info(
            "Expiry sweep finished: %d of %d candidates updated",
            len(expired),
            len(candidates),
        )

        if expired:
            await event_bus.publish(
                CardsExpired(
                    aggregate_id="cards",
                    card_ids=tuple(str(c.id) for c in expired),
                    source=command.source,
                )
            )

        return SweepResultDTO(updated_count=len(expired), expired_cards=expired)

    async def expire_one(self, card_id: uuid.UUID, now: datetime, source: str = "lazy") -> bool:
        """
        Stamp a single card as expired if it is still due.

        Args:
            card_id: Card UUID
            now: Time at which the card was observed as expired
            source: Label recorded on the CardsExpired event

        Returns:
            True if the card was updated
        """
        updated = await self.card_repository.mark_expired_if_due(card_id, now)
        if updated:
            await event_bus.publish(
                CardsExpired(aggregate_id=str(card_id), card_ids=(str(card_id),), source=source)
            )
        return updated
