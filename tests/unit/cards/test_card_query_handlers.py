"""
Unit tests for the card query handlers.
"""
from datetime import timedelta

import pytest

from cards.application.handlers.check_hwid_handler import CheckHwidHandler
from cards.application.handlers.list_cards_handler import ListCardsHandler
from cards.application.queries.check_hwid import CheckHwidQuery
from cards.application.queries.list_cards import ListCardsQuery
from core.domain.exceptions import CardValidationError
from core.domain.value_objects import CardStatus
from support.factories import HWID_A, HWID_B, make_bound_card, make_card


@pytest.mark.asyncio
class TestListCardsHandler:
    """Tests for ListCardsHandler."""

    async def test_newest_first_with_pagination(self, card_repository, now):
        """Test cards are listed newest first with page flags."""
        cards = [
            card_repository.add(make_card(created_at=now - timedelta(minutes=i)))
            for i in range(25)
        ]
        handler = ListCardsHandler(card_repository)

        first = await handler.handle(ListCardsQuery(page=1))
        last = await handler.handle(ListCardsQuery(page=3))

        assert [c.id for c in first.cards] == [c.id for c in cards[:10]]
        assert first.pagination.limit == 10
        assert first.pagination.total_docs == 25
        assert first.pagination.total_pages == 3
        assert first.pagination.has_next_page is True
        assert first.pagination.has_prev_page is False
        assert len(last.cards) == 5
        assert last.pagination.has_next_page is False
        assert last.pagination.has_prev_page is True

    async def test_limit_clamped(self, card_repository):
        """Test oversized limits are clamped to 100."""
        result = await ListCardsHandler(card_repository).handle(ListCardsQuery(limit=500))
        assert result.pagination.limit == 100

    async def test_empty_store(self, card_repository):
        """Test an empty listing reports zero pages."""
        result = await ListCardsHandler(card_repository).handle(ListCardsQuery())
        assert result.cards == []
        assert result.pagination.total_docs == 0
        assert result.pagination.total_pages == 0
        assert result.pagination.has_next_page is False

    @pytest.mark.parametrize("page", [0, -1, None])
    async def test_invalid_page(self, card_repository, page):
        """Test page numbers below 1 are rejected."""
        with pytest.raises(CardValidationError) as exc_info:
            await ListCardsHandler(card_repository).handle(ListCardsQuery(page=page))
        assert exc_info.value.context == {"field": "page"}

    async def test_unknown_status(self, card_repository):
        """Test an unknown status filter is rejected."""
        with pytest.raises(CardValidationError) as exc_info:
            await ListCardsHandler(card_repository).handle(ListCardsQuery(status="lost"))
        assert exc_info.value.context == {"field": "status"}

    async def test_filters(self, card_repository):
        """Test status and batch filters combine."""
        used = card_repository.add(make_bound_card(batch_id="batch-1"))
        card_repository.add(make_card(batch_id="batch-1"))
        card_repository.add(make_bound_card(batch_id="batch-2"))
        handler = ListCardsHandler(card_repository)

        result = await handler.handle(ListCardsQuery(status="used", batch_id="batch-1"))

        assert [c.id for c in result.cards] == [used.id]
        assert result.pagination.total_docs == 1


@pytest.mark.asyncio
class TestCheckHwidHandler:
    """Tests for CheckHwidHandler."""

    async def test_lists_bound_cards_with_validity(self, card_repository, now):
        """Test every card bound to the device is reported with its validity."""
        live = card_repository.add(make_bound_card(hwid=HWID_A, bound_at=now - timedelta(days=1)))
        stale = card_repository.add(make_bound_card(hwid=HWID_A, bound_at=now - timedelta(days=40)))
        card_repository.add(make_bound_card(hwid=HWID_B))

        result = await CheckHwidHandler(card_repository).handle(CheckHwidQuery(hwid=HWID_A.upper()))

        assert result.hwid == HWID_A
        assert result.bound is True
        assert result.total_cards == 2
        assert result.valid_cards == 1
        assert [(item.card.id, item.is_valid) for item in result.cards] == [
            (live.id, True),
            (stale.id, False),
        ]
        assert card_repository.cards[stale.id].status == CardStatus.USED

    async def test_unknown_device(self, card_repository):
        """Test a device with no cards is reported unbound."""
        result = await CheckHwidHandler(card_repository).handle(CheckHwidQuery(hwid=HWID_B))
        assert result.bound is False
        assert result.total_cards == 0
        assert result.cards == []

    async def test_malformed_hwid(self, card_repository):
        """Test a malformed hwid is rejected before lookup."""
        with pytest.raises(CardValidationError):
            await CheckHwidHandler(card_repository).handle(CheckHwidQuery(hwid="xyz"))
        assert card_repository.calls == []
