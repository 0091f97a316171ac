"""
Celery tasks for background processing.

Tasks for lazy expiry stamping and the periodic expiry sweep.
"""
import logging
import uuid
from datetime import datetime

from asgiref.sync import async_to_sync
from django.conf import settings

from CardLicenseService.celery import app
from cards.application.commands.sweep_expired_cards import SweepExpiredCardsCommand
from cards.application.handlers.sweep_expired_cards_handler import SweepExpiredCardsHandler
from cards.infrastructure.repositories.django_card_repository import DjangoCardRepository
from core.domain.exceptions import StoreFailureError
from core.metrics import card_background_write_failures_total

logger = logging.getLogger(__name__)


@app.task
def mark_card_expired_task(card_id: str, observed_at: str):
    """
    Move one card to the expired status if it is still due.

    Args:
        card_id: Card UUID
        observed_at: ISO timestamp at which the card was seen expired

    Returns:
        True if the card was updated. A failed write is logged and counted,
        never retried; the next verify or sweep converges the card.
    """
    handler = SweepExpiredCardsHandler(card_repository=DjangoCardRepository())
    try:
        updated = async_to_sync(handler.expire_one)(
            uuid.UUID(card_id), datetime.fromisoformat(observed_at), "lazy"
        )
    except StoreFailureError as exc:
        card_background_write_failures_total.labels(operation="lazy_expire").inc()
        logger.error("Lazy expiry of card %s failed: %s", card_id, exc)
        return False

    logger.info("Lazy expiry of card %s: %s", card_id, "updated" if updated else "no change")
    return updated


@app.task
def sweep_expired_cards_task():
    """
    Periodic expiry sweep.

    Returns:
        Number of cards moved to expired
    """
    handler = SweepExpiredCardsHandler(card_repository=DjangoCardRepository())
    result = async_to_sync(handler.handle)(
        SweepExpiredCardsCommand(limit=settings.CARDS_SWEEP_BATCH_SIZE, source="beat")
    )
    return result.updated_count
