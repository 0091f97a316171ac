"""
Integration tests for DjangoCardRepository.
"""

import uuid
from datetime import timedelta

import pytest

from cards.infrastructure.models import Card as CardModel
from core.domain.exceptions import CardNotFoundError, DuplicateCardKeyError
from core.domain.value_objects import CardStatus
from support.factories import HWID_A, HWID_B, make_bound_card, make_card


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestDjangoCardRepository:
    """Integration tests for DjangoCardRepository."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, django_card_repository):
        """Test creating and finding a card by id and key."""
        card = make_card(description="promo")

        saved = await django_card_repository.create(card)
        assert saved.id == card.id
        assert saved.created_at is not None

        by_id = await django_card_repository.find_by_id(card.id)
        by_key = await django_card_repository.find_by_key(card.key)
        assert by_id.key == card.key
        assert by_key.id == card.id
        assert by_key.status == CardStatus.UNUSED
        assert by_key.description == "promo"

    @pytest.mark.asyncio
    async def test_find_missing(self, django_card_repository):
        """Test lookups of unknown cards return None."""
        assert await django_card_repository.find_by_id(uuid.uuid4()) is None
        assert await django_card_repository.find_by_key("0" * 32) is None

    @pytest.mark.asyncio
    async def test_duplicate_key_rejected(self, django_card_repository):
        """Test the unique key constraint surfaces as a domain error."""
        card = await django_card_repository.create(make_card())

        with pytest.raises(DuplicateCardKeyError):
            await django_card_repository.create(make_card(key=card.key))

    @pytest.mark.asyncio
    async def test_bind_if_unused_is_conditional(self, django_card_repository, now):
        """Test the first-use write only applies to unused cards."""
        card = await django_card_repository.create(make_card())

        assert await django_card_repository.bind_if_unused(card.bind(HWID_A, now)) is True
        assert await django_card_repository.bind_if_unused(card.bind(HWID_B, now)) is False

        stored = await django_card_repository.find_by_id(card.id)
        assert stored.status == CardStatus.USED
        assert stored.hwid == HWID_A
        assert stored.expired_at == now + timedelta(days=30)

    @pytest.mark.asyncio
    async def test_save_unbound_card(self, django_card_repository, now):
        """Test saving a released card clears its binding."""
        card = await django_card_repository.create(make_bound_card())

        await django_card_repository.save(card.unbind(now))

        stored = await django_card_repository.find_by_id(card.id)
        assert stored.status == CardStatus.UNUSED
        assert stored.hwid is None
        assert stored.used_at is None
        assert stored.expired_at is None

    @pytest.mark.asyncio
    async def test_save_missing_card(self, django_card_repository):
        """Test saving an unknown card fails."""
        with pytest.raises(CardNotFoundError):
            await django_card_repository.save(make_card())

    @pytest.mark.asyncio
    async def test_expiry_candidates_and_mark(self, django_card_repository, now):
        """Test sweep candidates and the conditional expiry write."""
        due = await django_card_repository.create(
            make_bound_card(bound_at=now - timedelta(days=31))
        )
        await django_card_repository.create(make_bound_card(bound_at=now - timedelta(days=1)))
        await django_card_repository.create(make_card())

        candidates = await django_card_repository.find_expired_candidates(now)
        assert [c.id for c in candidates] == [due.id]

        assert await django_card_repository.mark_expired_if_due(due.id, now) is True
        assert await django_card_repository.mark_expired_if_due(due.id, now) is False
        assert await django_card_repository.find_expired_candidates(now) == []

        stored = await django_card_repository.find_by_id(due.id)
        assert stored.status == CardStatus.EXPIRED
        assert stored.hwid == HWID_A

    @pytest.mark.asyncio
    async def test_list_cards(self, django_card_repository):
        """Test filtered listing with pagination."""
        for _ in range(3):
            await django_card_repository.create(make_card(batch_id="batch-1"))
        await django_card_repository.create(make_bound_card(batch_id="batch-1"))
        await django_card_repository.create(make_card(batch_id="batch-2"))

        page = await django_card_repository.list_cards(
            status=CardStatus.UNUSED, batch_id="batch-1", page=1, limit=2
        )

        assert page.total_docs == 3
        assert page.total_pages == 2
        assert len(page.docs) == 2
        assert page.has_next_page is True
        assert all(c.batch_id == "batch-1" for c in page.docs)
        assert all(c.status == CardStatus.UNUSED for c in page.docs)

    @pytest.mark.asyncio
    async def test_find_by_hwid_most_recent_first(self, django_card_repository, now):
        """Test device lookup orders by most recent use."""
        older = await django_card_repository.create(
            make_bound_card(hwid=HWID_A, bound_at=now - timedelta(days=5))
        )
        newer = await django_card_repository.create(
            make_bound_card(hwid=HWID_A, bound_at=now - timedelta(days=1))
        )
        await django_card_repository.create(make_bound_card(hwid=HWID_B))

        cards = await django_card_repository.find_by_hwid(HWID_A.upper())

        assert [c.id for c in cards] == [newer.id, older.id]


@pytest.mark.django_db
@pytest.mark.integration
class TestCardModel:
    """Tests for the Card model."""

    def test_is_valid(self, now):
        """Test the model validity property."""
        live = CardModel(key="k" * 32, batch_id="b", status="used", expired_at=now + timedelta(days=1))
        stale = CardModel(key="l" * 32, batch_id="b", status="used", expired_at=now - timedelta(days=1))
        expired = CardModel(key="m" * 32, batch_id="b", status="expired")

        assert live.is_valid is True
        assert stale.is_valid is False
        assert expired.is_valid is False
