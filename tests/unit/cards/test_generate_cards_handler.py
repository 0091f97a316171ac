"""
Unit tests for GenerateCardsHandler.
"""
import pytest

from cards.application.commands.generate_cards import GenerateCardsCommand
from cards.application.handlers.generate_cards_handler import GenerateCardsHandler
from core.domain.exceptions import CardValidationError, DuplicateCardKeyError, StoreFailureError
from core.domain.value_objects import CardStatus
from support.in_memory import InMemoryCardRepository


class FlakyCardRepository(InMemoryCardRepository):
    """Repository whose every other create fails."""

    def __init__(self):
        super().__init__()
        self.attempts = 0

    async def create(self, card):
        self.attempts += 1
        if self.attempts % 2 == 0:
            raise DuplicateCardKeyError(context={"key": card.key})
        return await super().create(card)


@pytest.mark.asyncio
class TestGenerateCardsHandler:
    """Tests for GenerateCardsHandler."""

    async def test_generate_batch(self, card_repository):
        """Test cards share one batch id and start unused."""
        handler = GenerateCardsHandler(card_repository=card_repository)

        result = await handler.handle(GenerateCardsCommand(count=5, description="promo"))

        assert len(result.cards) == 5
        assert result.failed == []
        assert result.is_partial is False
        assert {c.batch_id for c in result.cards} == {result.batch_id}
        assert len({c.key for c in result.cards}) == 5
        for card in result.cards:
            assert card.status == "unused"
            assert card.description == "promo"
            assert card.hwid is None
        assert all(c.status == CardStatus.UNUSED for c in card_repository.cards.values())

    async def test_max_batch(self, card_repository):
        """Test the upper bound is accepted."""
        handler = GenerateCardsHandler(card_repository=card_repository)
        result = await handler.handle(GenerateCardsCommand(count=1000))
        assert len(result.cards) == 1000

    @pytest.mark.parametrize("count", [0, -1, 1001, True, "5", 2.5, None])
    async def test_invalid_count(self, card_repository, count):
        """Test counts outside 1..1000 or non-integers are rejected."""
        handler = GenerateCardsHandler(card_repository=card_repository)

        with pytest.raises(CardValidationError) as exc_info:
            await handler.handle(GenerateCardsCommand(count=count))

        assert exc_info.value.context == {"field": "count"}
        assert card_repository.calls == []

    async def test_partial_failure_reported(self):
        """Test failed inserts are listed without failing the batch."""
        repo = FlakyCardRepository()
        handler = GenerateCardsHandler(card_repository=repo)

        result = await handler.handle(GenerateCardsCommand(count=4))

        assert len(result.cards) == 2
        assert len(result.failed) == 2
        assert result.is_partial is True
        assert {f.code for f in result.failed} == {"DUPLICATE_KEY"}
        assert len(repo.cards) == 2

    async def test_total_failure_raises(self, card_repository):
        """Test the first error is raised when nothing was created."""
        card_repository.failing.add("create")
        handler = GenerateCardsHandler(card_repository=card_repository)

        with pytest.raises(StoreFailureError):
            await handler.handle(GenerateCardsCommand(count=3))

        assert card_repository.cards == {}
