"""
Cards API views.

These endpoints are used by:
- Devices, to verify a card and bind it on first use
- Administrators, to generate, list, inspect, sweep and unbind cards
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.cards.serializers import (
    CardListResponseSerializer,
    CheckHwidRequestSerializer,
    CheckHwidResponseSerializer,
    GenerateCardsRequestSerializer,
    GenerateCardsResponseSerializer,
    ListCardsQuerySerializer,
    SweepResponseSerializer,
    UnbindCardRequestSerializer,
    UnbindCardResponseSerializer,
    VerifyCardRequestSerializer,
    VerifyCardResponseSerializer,
)
from cards.application.commands.generate_cards import GenerateCardsCommand
from cards.application.commands.sweep_expired_cards import SweepExpiredCardsCommand
from cards.application.commands.unbind_card import UnbindCardCommand
from cards.application.commands.verify_card import VerifyCardCommand
from cards.application.handlers.check_hwid_handler import CheckHwidHandler
from cards.application.handlers.generate_cards_handler import GenerateCardsHandler
from cards.application.handlers.list_cards_handler import ListCardsHandler
from cards.application.handlers.sweep_expired_cards_handler import SweepExpiredCardsHandler
from cards.application.handlers.unbind_card_handler import UnbindCardHandler
from cards.application.handlers.verify_card_handler import VerifyCardHandler
from cards.application.queries.check_hwid import CheckHwidQuery
from cards.application.queries.list_cards import ListCardsQuery
from cards.infrastructure.expiry_dispatcher import CeleryExpiryDispatcher
from cards.infrastructure.repositories.django_card_repository import DjangoCardRepository
from core.domain.exceptions import CardValidationError, DomainException
from core.instrumentation import Status, StatusCode, get_tracer

# Initialize repositories (in production, use DI container)
_card_repo = DjangoCardRepository()
_expiry_dispatcher = CeleryExpiryDispatcher()

tracer = get_tracer(__name__)

ERROR_RESPONSES = {
    400: {"description": "Validation error"},
    401: {"description": "Missing admin credentials"},
    403: {"description": "Permission denied"},
}


def validated_data(serializer_class, data) -> dict:
    """
    Validate request data with a serializer.

    Raises:
        CardValidationError: With the serializer errors as details
    """
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise CardValidationError("Invalid request", context={"details": serializer.errors})
    return serializer.validated_data


def _record_error(span, exc: DomainException) -> None:
    span.set_attribute("error.code", exc.code)
    span.set_status(Status(StatusCode.ERROR, exc.message))


class ListCardsView(APIView):
    """View for listing cards."""

    @extend_schema(
        operation_id="list_cards",
        summary="List Cards",
        description="List cards newest first, filtered by status and batch. Requires admin capability.",
        tags=["Cards"],
        parameters=[
            OpenApiParameter("status", str, description="unused, used or expired"),
            OpenApiParameter("batchId", str, description="Batch id"),
            OpenApiParameter("page", int, description="1-based page number"),
            OpenApiParameter("limit", int, description="Page size, clamped to 1..100"),
        ],
        responses={200: CardListResponseSerializer, **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """List cards."""
        return async_to_sync(self._handle_list_cards)(request)

    async def _handle_list_cards(self, request: Request) -> Response:
        """Async handler for list cards."""
        with tracer.start_as_current_span("list_cards") as span:
            data = validated_data(ListCardsQuerySerializer, request.query_params)
            handler = ListCardsHandler(
                card_repository=_card_repo,
                default_page_size=settings.CARDS_DEFAULT_PAGE_SIZE,
                max_page_size=settings.CARDS_MAX_PAGE_SIZE,
            )
            try:
                result = await handler.handle(
                    ListCardsQuery(
                        status=data.get("status") or None,
                        batch_id=data.get("batch_id") or None,
                        page=data.get("page", 1),
                        limit=data.get("limit"),
                    )
                )
            except DomainException as e:
                _record_error(span, e)
                raise

            span.set_attribute("cards.total", result.pagination.total_docs)
            span.set_status(Status(StatusCode.OK))
            return Response(CardListResponseSerializer(result).data)


class GenerateCardsView(APIView):
    """View for generating a batch of cards."""

    @extend_schema(
        operation_id="generate_cards",
        summary="Generate Cards",
        description=(
            "Generate up to 1000 unused cards sharing one batch id. "
            "Returns 207 when only some cards could be created. Requires admin capability."
        ),
        tags=["Cards"],
        request=GenerateCardsRequestSerializer,
        responses={
            201: GenerateCardsResponseSerializer,
            207: GenerateCardsResponseSerializer,
            409: {"description": "Duplicate key"},
            503: {"description": "Card store unavailable"},
            **ERROR_RESPONSES,
        },
    )
    def post(self, request: Request) -> Response:
        """Generate cards."""
        return async_to_sync(self._handle_generate_cards)(request)

    async def _handle_generate_cards(self, request: Request) -> Response:
        """Async handler for generate cards."""
        with tracer.start_as_current_span("generate_cards") as span:
            data = validated_data(GenerateCardsRequestSerializer, request.data)
            span.set_attribute("cards.requested", data["count"])

            handler = GenerateCardsHandler(
                card_repository=_card_repo,
                max_batch_size=settings.CARDS_MAX_BATCH_SIZE,
            )
            try:
                result = await handler.handle(
                    GenerateCardsCommand(
                        count=data["count"],
                        description=data.get("description", ""),
                        expired_at=data.get("expired_at"),
                    )
                )
            except DomainException as e:
                _record_error(span, e)
                raise

            span.set_attribute("batch.id", result.batch_id)
            span.set_attribute("cards.created", len(result.cards))
            span.set_status(Status(StatusCode.OK))
            return Response(
                GenerateCardsResponseSerializer(result).data,
                status=status.HTTP_207_MULTI_STATUS if result.is_partial else status.HTTP_201_CREATED,
            )


class VerifyCardView(APIView):
    """View for verifying a card from a device."""

    @extend_schema(
        operation_id="verify_card",
        summary="Verify Card",
        description=(
            "Verify a card for a hardware id. The first successful verification "
            "binds the card to that device for 30 days; later calls from the same "
            "device succeed unchanged and calls from other devices are rejected."
        ),
        tags=["Cards"],
        request=VerifyCardRequestSerializer,
        responses={
            200: VerifyCardResponseSerializer,
            400: {"description": "Validation error"},
            404: {"description": "Card not found"},
            409: {"description": "Device conflict or card already used"},
            422: {"description": "Card expired"},
            503: {"description": "Card store unavailable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a card."""
        return async_to_sync(self._handle_verify_card)(request)

    async def _handle_verify_card(self, request: Request) -> Response:
        """Async handler for verify card."""
        with tracer.start_as_current_span("verify_card") as span:
            data = validated_data(VerifyCardRequestSerializer, request.data)

            handler = VerifyCardHandler(
                card_repository=_card_repo,
                expiry_dispatcher=_expiry_dispatcher,
                expiry_days=settings.CARD_EXPIRY_DAYS,
                accept_unbound_used=settings.CARDS_UNBOUND_USED_POLICY != "reject",
            )
            try:
                result = await handler.handle(VerifyCardCommand(key=data["key"], hwid=data["hwid"]))
            except DomainException as e:
                _record_error(span, e)
                raise

            span.set_attribute("card.id", str(result.card.id))
            span.set_attribute("card.first_use", result.first_use)
            span.set_status(Status(StatusCode.OK))
            return Response(VerifyCardResponseSerializer(result).data)


class CheckHwidView(APIView):
    """View for inspecting the cards bound to a device."""

    @extend_schema(
        operation_id="check_hwid",
        summary="Check HWID",
        description="List every card bound to a hardware id with its validity. Requires admin capability.",
        tags=["Cards"],
        request=CheckHwidRequestSerializer,
        responses={200: CheckHwidResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Check a hardware id."""
        return async_to_sync(self._handle_check_hwid)(request)

    async def _handle_check_hwid(self, request: Request) -> Response:
        """Async handler for check HWID."""
        with tracer.start_as_current_span("check_hwid") as span:
            data = validated_data(CheckHwidRequestSerializer, request.data)
            handler = CheckHwidHandler(card_repository=_card_repo)
            try:
                result = await handler.handle(CheckHwidQuery(hwid=data["hwid"]))
            except DomainException as e:
                _record_error(span, e)
                raise

            span.set_attribute("cards.total", result.total_cards)
            span.set_status(Status(StatusCode.OK))
            return Response(CheckHwidResponseSerializer(result).data)


class CheckExpiredView(APIView):
    """View for triggering the expiry sweep."""

    @extend_schema(
        operation_id="check_expired",
        summary="Check Expired Cards",
        description="Move every card whose expiry has passed to the expired status. Requires admin capability.",
        tags=["Cards"],
        request=None,
        responses={200: SweepResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Run the expiry sweep."""
        return async_to_sync(self._handle_check_expired)(request)

    async def _handle_check_expired(self, request: Request) -> Response:
        """Async handler for the expiry sweep."""
        with tracer.start_as_current_span("check_expired") as span:
            handler = SweepExpiredCardsHandler(card_repository=_card_repo)
            try:
                result = await handler.handle(
                    SweepExpiredCardsCommand(limit=settings.CARDS_SWEEP_BATCH_SIZE, source="api")
                )
            except DomainException as e:
                _record_error(span, e)
                raise

            span.set_attribute("cards.expired", result.updated_count)
            span.set_status(Status(StatusCode.OK))
            return Response(SweepResponseSerializer(result).data)


class UnbindCardView(APIView):
    """View for releasing a card from its device."""

    @extend_schema(
        operation_id="unbind_card",
        summary="Unbind Card",
        description=(
            "Reset a card to unused and clear its device binding. "
            "Requires the shared unbind secret in adminKey."
        ),
        tags=["Cards"],
        request=UnbindCardRequestSerializer,
        responses={
            200: UnbindCardResponseSerializer,
            400: {"description": "Validation error or card not bound"},
            403: {"description": "Invalid admin key"},
            404: {"description": "Card not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Unbind a card."""
        return async_to_sync(self._handle_unbind_card)(request)

    async def _handle_unbind_card(self, request: Request) -> Response:
        """Async handler for unbind card."""
        with tracer.start_as_current_span("unbind_card") as span:
            data = validated_data(UnbindCardRequestSerializer, request.data)
            handler = UnbindCardHandler(
                card_repository=_card_repo,
                unbind_secret=settings.CARDS_ADMIN_UNBIND_KEY,
            )
            try:
                card = await handler.handle(
                    UnbindCardCommand(card_id=data["card_id"], admin_key=data["admin_key"])
                )
            except DomainException as e:
                _record_error(span, e)
                raise

            span.set_attribute("card.id", str(card.id))
            span.set_status(Status(StatusCode.OK))
            return Response(UnbindCardResponseSerializer({"card": card}).data)
