"""
Django management command to check and mark expired cards.

This command can be run periodically (e.g., via cron) when Celery beat
is not deployed.
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from cards.application.commands.sweep_expired_cards import SweepExpiredCardsCommand
from cards.application.handlers.sweep_expired_cards_handler import SweepExpiredCardsHandler
from cards.infrastructure.repositories.django_card_repository import DjangoCardRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to check and mark expired cards."""

    help = "Check and mark expired cards"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update cards",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=settings.CARDS_SWEEP_BATCH_SIZE,
            help="Maximum number of cards to process",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        repository = DjangoCardRepository()
        now = timezone.now()

        if options["dry_run"]:
            candidates = async_to_sync(repository.find_expired_candidates)(now, options["limit"])
            self.stdout.write(f"Found {len(candidates)} expired card(s)")
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for card in candidates[:10]:
                self.stdout.write(f"  - Card {card.key} expired at {card.expired_at}")
            return

        handler = SweepExpiredCardsHandler(card_repository=repository)
        result = async_to_sync(handler.handle)(
            SweepExpiredCardsCommand(now=now, limit=options["limit"], source="command")
        )

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully marked {result.updated_count} card(s) as expired")
        )
