"""
ListCardsHandler.

Handles the list cards query.
"""

from cards.application.dto.card_dto import CardDTO, CardListDTO, PaginationDTO
from cards.application.queries.list_cards import ListCardsQuery
from cards.domain.services import CardPageBounds
from cards.ports.card_repository import CardRepository
from core.domain.exceptions import CardValidationError
from core.domain.value_objects import CardStatus

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class ListCardsHandler:
    """Handler for ListCardsQuery."""

    def __init__(
        self,
        card_repository: CardRepository,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        """Initialize handler with repository and paging bounds."""
        self.card_repository = card_repository
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def handle(self, query: ListCardsQuery) -> CardListDTO:
        """
        Handle list cards query.

        Args:
            query: ListCardsQuery

        Returns:
            CardListDTO with cards and pagination

        Raises:
            CardValidationError: If page < 1 or status is unknown
        """
        if query.page is None or query.page < 1:
            raise CardValidationError("page must be at least 1", context={"field": "page"})

        status = None
        if query.status:
            try:
                status = CardStatus(query.status)
            except ValueError:
                raise CardValidationError(
                    f"Unknown status '{query.status}'", context={"field": "status"}
                )

        limit = CardPageBounds.clamp_limit(
            query.limit, default=self.default_page_size, maximum=self.max_page_size
        )

        page = await self.card_repository.list_cards(
            status=status,
            batch_id=query.batch_id or None,
            page=query.page,
            limit=limit,
        )

        return CardListDTO(
            cards=[CardDTO.from_entity(card) for card in page.docs],
            pagination=PaginationDTO(
                page=page.page,
                limit=page.limit,
                total_pages=page.total_pages,
                total_docs=page.total_docs,
                has_next_page=page.has_next_page,
                has_prev_page=page.has_prev_page,
            ),
        )
