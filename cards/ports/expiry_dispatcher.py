"""
Expiry dispatcher port.

Hands a "mark this card expired" write to something that completes it
independently of the caller.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime


class ExpiryDispatcher(ABC):
    """Abstract dispatcher for lazy expiry writes."""

    @abstractmethod
    async def dispatch(self, card_id: uuid.UUID, now: datetime) -> None:
        """
        Schedule the expiry write for a card.

        Implementations must not raise; dispatch failures are logged.

        Args:
            card_id: Card UUID
            now: Time at which the card was observed as expired
        """
        pass
