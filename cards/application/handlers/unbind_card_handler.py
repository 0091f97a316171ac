"""
UnbindCardHandler.

Handles the administrative unbind command.
"""

import logging
import secrets
import uuid

from cards.application.commands.unbind_card import UnbindCardCommand
from cards.application.dto.card_dto import CardDTO
from cards.domain.card import utcnow
from cards.domain.events import CardUnbound
from cards.ports.card_repository import CardRepository
from core.domain.exceptions import (
    AdminPermissionError,
    CardNotFoundError,
    CardValidationError,
)
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class UnbindCardHandler:
    """Handler for UnbindCardCommand."""

    def __init__(self, card_repository: CardRepository, unbind_secret: str = ""):
        """
        Initialize handler.

        Args:
            card_repository: Card repository
            unbind_secret: Shared secret required to unbind; empty denies every request
        """
        self.card_repository = card_repository
        self.unbind_secret = unbind_secret or ""

    async def handle(self, command: UnbindCardCommand) -> CardDTO:
        """
        Handle unbind command.

        Args:
            command: UnbindCardCommand

        Returns:
            CardDTO of the released card

        Raises:
            AdminPermissionError: If the admin key does not match
            CardValidationError: If card_id is not a UUID
            CardNotFoundError: If the card does not exist
            CardNotBoundError: If the card has no bound device
        """
        if not self._authorized(command.admin_key):
            logger.warning("Unbind refused for card %s: bad admin key", command.card_id)
            raise AdminPermissionError("Invalid admin key")

        try:
            card_id = uuid.UUID(str(command.card_id))
        except ValueError:
            raise CardValidationError("cardId must be a UUID", context={"field": "cardId"})

        return await self.release(card_id)

    async def release(self, card_id: uuid.UUID) -> CardDTO:
        """
        Unbind a card without the shared-secret check.

        Used directly by already authorised callers such as the Django admin.

        Raises:
            CardNotFoundError: If the card does not exist
            CardNotBoundError: If the card has no bound device
        """
        card = await self.card_repository.find_by_id(card_id)
        if card is None:
            raise CardNotFoundError()

        released = card.unbind(utcnow())
        saved = await self.card_repository.save(released)

        await event_bus.publish(
            CardUnbound(aggregate_id=str(card.id), card_key=card.key, previous_hwid=card.hwid)
        )
        logger.info("Card %s unbound from %s", card.id, card.hwid)

        return CardDTO.from_entity(saved)

    def _authorized(self, admin_key: str) -> bool:
        if not self.unbind_secret or not isinstance(admin_key, str):
            return False
        return secrets.compare_digest(admin_key.encode("utf-8"), self.unbind_secret.encode("utf-8"))
