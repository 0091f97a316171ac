"""
CheckHwidHandler.

Handles the check HWID query.
"""

from cards.application.dto.card_dto import CardDTO, CheckHwidResultDTO, HwidCardDTO
from cards.application.queries.check_hwid import CheckHwidQuery
from cards.domain.card import utcnow
from cards.ports.card_repository import CardRepository
from core.domain.exceptions import CardValidationError
from core.domain.value_objects import HardwareId


class CheckHwidHandler:
    """Handler for CheckHwidQuery."""

    def __init__(self, card_repository: CardRepository):
        """Initialize handler with repository."""
        self.card_repository = card_repository

    async def handle(self, query: CheckHwidQuery) -> CheckHwidResultDTO:
        """
        Handle check HWID query. Read-only; stored status is never rewritten.

        Args:
            query: CheckHwidQuery

        Returns:
            CheckHwidResultDTO

        Raises:
            CardValidationError: If hwid is malformed
        """
        try:
            hwid = HardwareId(query.hwid).value
        except ValueError as e:
            raise CardValidationError(str(e), context={"field": "hwid"})

        now = utcnow()
        cards = await self.card_repository.find_by_hwid(hwid)
        items = [HwidCardDTO(card=CardDTO.from_entity(c), is_valid=c.is_valid(now)) for c in cards]

        return CheckHwidResultDTO(
            hwid=hwid,
            bound=bool(items),
            total_cards=len(items),
            valid_cards=sum(1 for item in items if item.is_valid),
            cards=items,
        )
