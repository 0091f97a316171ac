"""
Django management command to generate a batch of cards.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from cards.application.commands.generate_cards import GenerateCardsCommand
from cards.application.handlers.generate_cards_handler import GenerateCardsHandler
from cards.infrastructure.repositories.django_card_repository import DjangoCardRepository
from core.domain.exceptions import DomainException


class Command(BaseCommand):
    """Command to generate cards."""

    help = "Generate a batch of unused cards and print their keys"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("count", type=int, help="Number of cards to generate")
        parser.add_argument(
            "--description",
            default="",
            help="Description stored on every card of the batch",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = GenerateCardsHandler(
            card_repository=DjangoCardRepository(),
            max_batch_size=settings.CARDS_MAX_BATCH_SIZE,
        )
        try:
            result = async_to_sync(handler.handle)(
                GenerateCardsCommand(count=options["count"], description=options["description"])
            )
        except DomainException as e:
            raise CommandError(f"{e.code}: {e.message}") from e

        self.stdout.write(f"Batch {result.batch_id}")
        for card in result.cards:
            self.stdout.write(card.key)
        for failed in result.failed:
            self.stderr.write(f"Failed {failed.key}: {failed.code}")
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Generated {len(result.cards)} card(s)"))
