"""
Integration tests for card management commands and Celery tasks.
"""

from datetime import timedelta
from io import StringIO

import pytest
from asgiref.sync import async_to_sync
from django.core.management import CommandError, call_command
from prometheus_client import REGISTRY

from cards.infrastructure.models import Card as CardModel
from cards.infrastructure.repositories.django_card_repository import DjangoCardRepository
from core.domain.exceptions import StoreFailureError
from core.tasks import mark_card_expired_task, sweep_expired_cards_task
from support.factories import make_bound_card


def create_card(repository, card):
    return async_to_sync(repository.create)(card)


@pytest.mark.django_db
@pytest.mark.integration
class TestGenerateCardsCommand:
    """Tests for the generate_cards command."""

    def test_generate(self):
        """Test the command prints the batch and its keys."""
        out = StringIO()
        call_command("generate_cards", "3", "--description", "reseller", stdout=out)

        lines = out.getvalue().splitlines()
        assert lines[0].startswith("Batch ")
        assert len(lines) == 5
        assert CardModel.objects.filter(description="reseller").count() == 3

    def test_invalid_count(self):
        """Test an out-of-range count fails the command."""
        with pytest.raises(CommandError, match="VALIDATION_ERROR"):
            call_command("generate_cards", "0", stdout=StringIO())


@pytest.mark.django_db
@pytest.mark.integration
class TestCheckCardExpirationsCommand:
    """Tests for the check_card_expirations command."""

    def test_dry_run_changes_nothing(self, django_card_repository, now):
        """Test dry run only reports candidates."""
        card = create_card(
            django_card_repository, make_bound_card(bound_at=now - timedelta(days=31))
        )
        out = StringIO()

        call_command("check_card_expirations", "--dry-run", stdout=out)

        assert "Found 1 expired card(s)" in out.getvalue()
        assert CardModel.objects.get(id=card.id).status == "used"

    def test_sweep(self, django_card_repository, now):
        """Test the command expires overdue cards."""
        card = create_card(
            django_card_repository, make_bound_card(bound_at=now - timedelta(days=31))
        )
        out = StringIO()

        call_command("check_card_expirations", stdout=out)

        assert "marked 1 card(s)" in out.getvalue()
        assert CardModel.objects.get(id=card.id).status == "expired"


@pytest.mark.django_db
@pytest.mark.integration
class TestCardTasks:
    """Tests for the Celery tasks."""

    def test_mark_card_expired_task(self, django_card_repository, now):
        """Test the lazy stamp task expires a due card once."""
        card = create_card(
            django_card_repository, make_bound_card(bound_at=now - timedelta(days=31))
        )

        first = mark_card_expired_task.apply(args=(str(card.id), now.isoformat()))
        second = mark_card_expired_task.apply(args=(str(card.id), now.isoformat()))

        assert first.get() is True
        assert second.get() is False
        assert CardModel.objects.get(id=card.id).status == "expired"

    def test_mark_card_expired_task_failure_is_not_retried(
        self, django_card_repository, now, monkeypatch
    ):
        """Test a failed lazy stamp is logged and counted, then dropped."""
        card = create_card(
            django_card_repository, make_bound_card(bound_at=now - timedelta(days=31))
        )

        async def failing_mark(self, card_id, observed_at):
            raise StoreFailureError()

        monkeypatch.setattr(DjangoCardRepository, "mark_expired_if_due", failing_mark)
        labels = {"operation": "lazy_expire"}
        before = REGISTRY.get_sample_value("card_background_write_failures_total", labels) or 0

        result = mark_card_expired_task.apply(args=(str(card.id), now.isoformat()))

        assert result.state == "SUCCESS"
        assert result.get() is False
        assert REGISTRY.get_sample_value("card_background_write_failures_total", labels) == before + 1
        assert CardModel.objects.get(id=card.id).status == "used"

    def test_sweep_task(self, django_card_repository, now):
        """Test the periodic sweep task."""
        create_card(django_card_repository, make_bound_card(bound_at=now - timedelta(days=31)))
        create_card(django_card_repository, make_bound_card())

        assert sweep_expired_cards_task.apply().get() == 1
