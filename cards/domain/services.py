"""
Card domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from datetime import datetime
from enum import Enum

from cards.domain.card import Card
from core.domain.value_objects import CardStatus


class VerificationOutcome(Enum):
    """Result of evaluating a verify request against stored card state."""

    EXPIRED_BY_TIME = "expired_by_time"
    EXPIRED = "expired"
    REPEAT = "repeat"
    CONFLICT = "conflict"
    ALREADY_USED = "already_used"
    FIRST_USE = "first_use"


class CardBindingPolicy:
    """Domain service deciding what a verify request does to a card."""

    @staticmethod
    def evaluate(
        card: Card,
        hwid: str,
        now: datetime,
        accept_unbound_used: bool = True,
    ) -> VerificationOutcome:
        """
        Evaluate a verify request.

        Checks run in a fixed order: time expiry dominates stored status,
        stored expiry dominates binding state.

        Args:
            card: Current card state
            hwid: Normalised hardware id of the caller
            now: Evaluation time
            accept_unbound_used: Whether a used card with no bound device
                is accepted as a repeat

        Returns:
            VerificationOutcome
        """
        if card.is_time_expired(now):
            return VerificationOutcome.EXPIRED_BY_TIME

        if card.status == CardStatus.EXPIRED:
            return VerificationOutcome.EXPIRED

        if card.status == CardStatus.USED:
            if card.hwid is None:
                if accept_unbound_used:
                    return VerificationOutcome.REPEAT
                return VerificationOutcome.ALREADY_USED
            if card.is_bound_to(hwid):
                return VerificationOutcome.REPEAT
            return VerificationOutcome.CONFLICT

        return VerificationOutcome.FIRST_USE


class CardPageBounds:
    """Domain service for list pagination bounds."""

    @staticmethod
    def clamp_limit(limit: int, default: int = 10, maximum: int = 100) -> int:
        """
        Clamp a requested page size.

        Args:
            limit: Requested page size, or None for the default
            default: Page size when none is requested
            maximum: Upper bound

        Returns:
            Page size in [1, maximum]
        """
        if limit is None:
            return default
        return max(1, min(limit, maximum))
