"""
Serializers for Cards API endpoints.

Wire names are camelCase; validated data uses the snake_case names of
the application commands.
"""

from rest_framework import serializers


class GenerateCardsRequestSerializer(serializers.Serializer):
    """Serializer for generate cards request."""

    count = serializers.IntegerField(required=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    expiredAt = serializers.DateTimeField(required=False, allow_null=True, source="expired_at")

    def validate_count(self, value):
        """Reject booleans, which IntegerField would coerce to 0/1."""
        if isinstance(self.initial_data.get("count"), bool):
            raise serializers.ValidationError("A valid integer is required.")
        return value


class VerifyCardRequestSerializer(serializers.Serializer):
    """Serializer for verify card request."""

    key = serializers.CharField(required=True, trim_whitespace=False)
    hwid = serializers.CharField(required=True, trim_whitespace=False)


class CheckHwidRequestSerializer(serializers.Serializer):
    """Serializer for check HWID request."""

    hwid = serializers.CharField(required=True, trim_whitespace=False)


class UnbindCardRequestSerializer(serializers.Serializer):
    """
    Serializer for unbind request.

    Both fields default to empty so that the shared-secret check runs
    before any other validation.
    """

    cardId = serializers.CharField(required=False, allow_blank=True, default="", source="card_id")
    adminKey = serializers.CharField(
        required=False, allow_blank=True, default="", trim_whitespace=False, source="admin_key"
    )


class ListCardsQuerySerializer(serializers.Serializer):
    """Serializer for list cards query parameters."""

    status = serializers.CharField(required=False, allow_blank=True)
    batchId = serializers.CharField(required=False, allow_blank=True, source="batch_id")
    page = serializers.IntegerField(required=False, default=1)
    limit = serializers.IntegerField(required=False)


class CardSerializer(serializers.Serializer):
    """Serializer for CardDTO."""

    id = serializers.UUIDField()
    key = serializers.CharField()
    status = serializers.CharField()
    description = serializers.CharField()
    hwid = serializers.CharField(allow_null=True)
    usedAt = serializers.DateTimeField(source="used_at", allow_null=True)
    bindAt = serializers.DateTimeField(source="bind_at", allow_null=True)
    expiredAt = serializers.DateTimeField(source="expired_at", allow_null=True)
    batchId = serializers.CharField(source="batch_id")
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True)
    updatedAt = serializers.DateTimeField(source="updated_at", allow_null=True)


class FailedCardSerializer(serializers.Serializer):
    """Serializer for FailedCardDTO."""

    key = serializers.CharField()
    code = serializers.CharField()
    message = serializers.CharField()


class GenerateCardsResponseSerializer(serializers.Serializer):
    """Serializer for generate cards response."""

    batchId = serializers.CharField(source="batch_id")
    cards = CardSerializer(many=True)
    failed = FailedCardSerializer(many=True)


class VerifyCardResponseSerializer(serializers.Serializer):
    """Serializer for verify card response."""

    success = serializers.SerializerMethodField()
    serverTime = serializers.SerializerMethodField()
    card = CardSerializer()

    def get_success(self, obj) -> bool:
        return True

    def get_serverTime(self, obj) -> int:
        """Server time in epoch milliseconds."""
        return int(obj.server_time.timestamp() * 1000)


class ExpiredCardSerializer(serializers.Serializer):
    """Serializer for ExpiredCardDTO."""

    id = serializers.UUIDField()
    key = serializers.CharField()
    expiredAt = serializers.DateTimeField(source="expired_at", allow_null=True)


class SweepResponseSerializer(serializers.Serializer):
    """Serializer for check-expired response."""

    updated = serializers.IntegerField(source="updated_count")
    expiredCards = ExpiredCardSerializer(many=True, source="expired_cards")


class PaginationSerializer(serializers.Serializer):
    """Serializer for PaginationDTO."""

    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    totalPages = serializers.IntegerField(source="total_pages")
    totalDocs = serializers.IntegerField(source="total_docs")
    hasNextPage = serializers.BooleanField(source="has_next_page")
    hasPrevPage = serializers.BooleanField(source="has_prev_page")


class CardListResponseSerializer(serializers.Serializer):
    """Serializer for list cards response."""

    cards = CardSerializer(many=True)
    pagination = PaginationSerializer()


class CheckHwidResponseSerializer(serializers.Serializer):
    """Serializer for check HWID response."""

    hwid = serializers.CharField()
    bound = serializers.BooleanField()
    totalCards = serializers.IntegerField(source="total_cards")
    validCards = serializers.IntegerField(source="valid_cards")
    cards = serializers.SerializerMethodField()

    def get_cards(self, obj) -> list:
        data = []
        for item in obj.cards:
            card = CardSerializer(item.card).data
            card["isValid"] = item.is_valid
            data.append(card)
        return data


class UnbindCardResponseSerializer(serializers.Serializer):
    """Serializer for unbind response."""

    success = serializers.SerializerMethodField()
    card = CardSerializer()

    def get_success(self, obj) -> bool:
        return True
