"""
VerifyCardHandler.

Handles the verify card command: validates a card for a device and binds
it on first use.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from cards.application.commands.verify_card import VerifyCardCommand
from cards.application.dto.card_dto import CardDTO, VerifyCardResultDTO
from cards.domain.card import DEFAULT_EXPIRY_DAYS, Card, utcnow
from cards.domain.events import CardBound, CardVerificationRejected, CardVerified
from cards.domain.services import CardBindingPolicy, VerificationOutcome
from cards.ports.card_repository import CardRepository
from cards.ports.expiry_dispatcher import ExpiryDispatcher
from core.domain.exceptions import (
    CardAlreadyUsedError,
    CardExpiredError,
    CardNotFoundError,
    CardValidationError,
    DeviceConflictError,
    StoreFailureError,
)
from core.domain.value_objects import CardKey, HardwareId
from core.infrastructure.events import event_bus
from core.metrics import card_background_write_failures_total

logger = logging.getLogger(__name__)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 rendering used in error context fields."""
    return value.isoformat() if value else None


class VerifyCardHandler:
    """
    Handler for VerifyCardCommand.

    The first-use transition is a conditional update on status='unused'.
    A request that loses that race re-reads the card and is evaluated
    again, so two devices racing for one card end with exactly one
    binding.
    """

    MAX_BIND_ATTEMPTS = 3

    def __init__(
        self,
        card_repository: CardRepository,
        expiry_dispatcher: ExpiryDispatcher,
        expiry_days: int = DEFAULT_EXPIRY_DAYS,
        accept_unbound_used: bool = True,
    ):
        """Initialize handler with repository, dispatcher and policy settings."""
        self.card_repository = card_repository
        self.expiry_dispatcher = expiry_dispatcher
        self.expiry_days = expiry_days
        self.accept_unbound_used = accept_unbound_used

    async def handle(self, command: VerifyCardCommand) -> VerifyCardResultDTO:
        """
        Handle verify card command.

        Args:
            command: VerifyCardCommand

        Returns:
            VerifyCardResultDTO with the bound card snapshot

        Raises:
            CardValidationError: If key or hwid is malformed
            CardNotFoundError: If no card has this key
            CardExpiredError: If the card has expired
            DeviceConflictError: If the card is bound to another device
            CardAlreadyUsedError: If the card is used, unbound, and the
                policy rejects that state
            StoreFailureError: If the store is unavailable
        """
        key, hwid = self._validate(command)
        now = command.now or utcnow()

        for attempt in range(1, self.MAX_BIND_ATTEMPTS + 1):
            card = await self.card_repository.find_by_key(key)
            if card is None:
                await self._reject(key, "not_found")
                raise CardNotFoundError()

            outcome = CardBindingPolicy.evaluate(
                card, hwid, now, accept_unbound_used=self.accept_unbound_used
            )

            if outcome == VerificationOutcome.FIRST_USE:
                result = await self._bind(card, hwid, now)
                if result is not None:
                    return result
                logger.info(
                    "Card %s changed state during binding, re-evaluating (attempt %d)",
                    card.id,
                    attempt,
                )
                continue

            return await self._resolve(card, hwid, now, outcome)

        logger.error("Card %s did not settle after %d binding attempts", key, self.MAX_BIND_ATTEMPTS)
        raise StoreFailureError("Card state changed concurrently, retry the request")

    def _validate(self, command: VerifyCardCommand) -> Tuple[str, str]:
        """Validate and normalise the key and hwid."""
        try:
            key = CardKey(command.key).value
        except ValueError as e:
            raise CardValidationError(str(e), context={"field": "key"})
        try:
            hwid = HardwareId(command.hwid).value
        except ValueError as e:
            raise CardValidationError(str(e), context={"field": "hwid"})
        return key, hwid

    async def _resolve(
        self,
        card: Card,
        hwid: str,
        now: datetime,
        outcome: VerificationOutcome,
    ) -> VerifyCardResultDTO:
        """Turn a non-binding outcome into a result or an error."""
        if outcome == VerificationOutcome.EXPIRED_BY_TIME:
            await self.expiry_dispatcher.dispatch(card.id, now)
            await self._reject(card.key, "expired", card)
            raise CardExpiredError(context={"expiredAt": format_timestamp(card.expired_at)})

        if outcome == VerificationOutcome.EXPIRED:
            await self._reject(card.key, "expired", card)
            raise CardExpiredError(context={"expiredAt": format_timestamp(card.expired_at)})

        if outcome == VerificationOutcome.CONFLICT:
            await self._reject(card.key, "device_conflict", card)
            raise DeviceConflictError(
                context={
                    "usedAt": format_timestamp(card.used_at),
                    "bindAt": format_timestamp(card.bind_at),
                }
            )

        if outcome == VerificationOutcome.ALREADY_USED:
            await self._reject(card.key, "already_used", card)
            raise CardAlreadyUsedError(context={"usedAt": format_timestamp(card.used_at)})

        await event_bus.publish(
            CardVerified(aggregate_id=str(card.id), card_key=card.key, hwid=hwid)
        )
        return VerifyCardResultDTO(card=CardDTO.from_entity(card), server_time=now)

    async def _bind(self, card: Card, hwid: str, now: datetime) -> Optional[VerifyCardResultDTO]:
        """
        Attempt the first-use transition.

        Returns:
            Result DTO, or None if another request changed the card first
        """
        bound = card.bind(hwid, now, self.expiry_days)
        persisted = True
        try:
            if not await self.card_repository.bind_if_unused(bound):
                return None
        except StoreFailureError:
            # The computed snapshot is returned even though it was not stored.
            persisted = False
            card_background_write_failures_total.labels(operation="bind").inc()
            logger.error("Failed to persist binding of card %s to %s", card.id, hwid, exc_info=True)

        await event_bus.publish(
            CardBound(
                aggregate_id=str(card.id),
                card_key=card.key,
                hwid=hwid,
                expired_at=bound.expired_at,
                persisted=persisted,
            )
        )
        if persisted:
            logger.info("Card %s bound to %s until %s", card.id, hwid, bound.expired_at.isoformat())
        return VerifyCardResultDTO(card=CardDTO.from_entity(bound), server_time=now, first_use=True)

    async def _reject(self, key: str, reason: str, card: Optional[Card] = None) -> None:
        await event_bus.publish(
            CardVerificationRejected(
                aggregate_id=str(card.id) if card else key,
                card_key=key,
                reason=reason,
            )
        )
