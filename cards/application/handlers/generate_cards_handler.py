"""
GenerateCardsHandler.

Handles the generate cards command.
"""

import logging
from typing import List, Optional

from cards.application.commands.generate_cards import GenerateCardsCommand
from cards.application.dto.card_dto import CardDTO, FailedCardDTO, GenerateCardsResultDTO
from cards.domain.card import Card
from cards.domain.events import CardBatchGenerated
from cards.domain.key_generator import generate_batch_id, generate_card_key
from cards.ports.card_repository import CardRepository
from core.domain.exceptions import (
    CardValidationError,
    DomainException,
    DuplicateCardKeyError,
    StoreFailureError,
)
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 1000


class GenerateCardsHandler:
    """Handler for GenerateCardsCommand."""

    def __init__(self, card_repository: CardRepository, max_batch_size: int = MAX_BATCH_SIZE):
        """Initialize handler with repository."""
        self.card_repository = card_repository
        self.max_batch_size = max_batch_size

    async def handle(self, command: GenerateCardsCommand) -> GenerateCardsResultDTO:
        """
        Handle generate cards command.

        Every card is inserted independently. Cards whose insert fails are
        reported in the result; the call only fails as a whole when no card
        could be created.

        Args:
            command: GenerateCardsCommand

        Returns:
            GenerateCardsResultDTO with created and failed cards

        Raises:
            CardValidationError: If count is not an integer in range
            DuplicateCardKeyError: If no card was created because of a key collision
            StoreFailureError: If no card was created because the store failed
        """
        self._validate(command)

        batch_id = generate_batch_id()
        created: List[Card] = []
        failed: List[FailedCardDTO] = []
        first_error: Optional[DomainException] = None

        for _ in range(command.count):
            card = Card.create(
                key=generate_card_key(),
                batch_id=batch_id,
                description=command.description,
                expired_at=command.expired_at,
            )
            try:
                created.append(await self.card_repository.create(card))
            except (DuplicateCardKeyError, StoreFailureError) as e:
                failed.append(FailedCardDTO(key=card.key, code=e.code, message=e.message))
                first_error = first_error or e

        if not created:
            logger.error("Batch %s failed: no card could be created", batch_id)
            raise first_error

        if failed:
            logger.warning(
                "Batch %s partially created: %d created, %d failed",
                batch_id,
                len(created),
                len(failed),
            )
        else:
            logger.info("Batch %s created with %d cards", batch_id, len(created))

        await event_bus.publish(
            CardBatchGenerated(
                aggregate_id=batch_id,
                batch_id=batch_id,
                created_count=len(created),
                failed_count=len(failed),
            )
        )

        return GenerateCardsResultDTO(
            batch_id=batch_id,
            cards=[CardDTO.from_entity(card) for card in created],
            failed=failed,
        )

    def _validate(self, command: GenerateCardsCommand) -> None:
        count = command.count
        if isinstance(count, bool) or not isinstance(count, int):
            raise CardValidationError("count must be an integer", context={"field": "count"})
        if not 1 <= count <= self.max_batch_size:
            raise CardValidationError(
                f"count must be between 1 and {self.max_batch_size}",
                context={"field": "count"},
            )
