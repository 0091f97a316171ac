"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and business metrics.
"""

import logging

from cards.domain.events import (
    CardBatchGenerated,
    CardBound,
    CardsExpired,
    CardUnbound,
    CardVerificationRejected,
    CardVerified,
)
from core.domain.events import DomainEvent, EventHandler
from core.metrics import (
    card_verifications_total,
    cards_expired_total,
    cards_generated_total,
    cards_unbound_total,
)

logger = logging.getLogger("core.audit")


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event as a structured log record.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={"event": event.to_dict()},
        )


class CardMetricsEventHandler(EventHandler):
    """Event handler that feeds the card Prometheus counters."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, CardBound):
            card_verifications_total.labels(outcome="first_use").inc()
        elif isinstance(event, CardVerified):
            card_verifications_total.labels(outcome="repeat").inc()
        elif isinstance(event, CardVerificationRejected):
            card_verifications_total.labels(outcome=event.reason).inc()
        elif isinstance(event, CardBatchGenerated):
            cards_generated_total.inc(event.created_count)
        elif isinstance(event, CardsExpired):
            cards_expired_total.labels(source=event.source).inc(len(event.card_ids))
        elif isinstance(event, CardUnbound):
            cards_unbound_total.inc()


AUDITED_EVENTS = (
    CardBatchGenerated,
    CardBound,
    CardVerificationRejected,
    CardsExpired,
    CardUnbound,
)

METERED_EVENTS = AUDITED_EVENTS + (CardVerified,)


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = CardMetricsEventHandler()

    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
    for event_type in METERED_EVENTS:
        event_bus.subscribe(event_type, metrics_handler)

    logging.getLogger(__name__).info("Event handlers registered")
