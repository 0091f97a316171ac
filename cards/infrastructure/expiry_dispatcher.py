"""
Celery-backed expiry dispatcher.

Queues the lazy "mark expired" write so the verify request never waits
for it.
"""
import logging
import uuid
from datetime import datetime

from asgiref.sync import sync_to_async

from cards.ports.expiry_dispatcher import ExpiryDispatcher
from core.metrics import card_background_write_failures_total

logger = logging.getLogger(__name__)


class CeleryExpiryDispatcher(ExpiryDispatcher):
    """Dispatch expiry writes as Celery tasks."""

    async def dispatch(self, card_id: uuid.UUID, now: datetime) -> None:
        """
        Queue core.tasks.mark_card_expired_task for a card.

        Args:
            card_id: Card UUID
            now: Time at which the card was observed as expired
        """
        from core.tasks import mark_card_expired_task

        try:
            await sync_to_async(mark_card_expired_task.delay)(str(card_id), now.isoformat())
        except Exception as e:
            card_background_write_failures_total.labels(operation="lazy_expire").inc()
            logger.error(
                "Failed to dispatch expiry write for card %s: %s",
                card_id,
                e,
                exc_info=True,
            )
