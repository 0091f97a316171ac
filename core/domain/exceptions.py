"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""
from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(
        self,
        message: str,
        code: str = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            context: Extra fields returned to the caller (e.g. expiredAt)
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.context = context or {}


class CardException(DomainException):
    """Base exception for card-related errors."""

    pass


class CardValidationError(CardException):
    """Raised when input is malformed or out of range."""

    def __init__(self, message: str = "Invalid request", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", context=context)


class CardNotFoundError(CardException):
    """Raised when a card is not found."""

    def __init__(self, message: str = "Card not found"):
        super().__init__(message, code="CARD_NOT_FOUND")


class CardExpiredError(CardException):
    """Raised when a card has expired, by time or by stored status."""

    def __init__(self, message: str = "Card has expired", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CARD_EXPIRED", context=context)


class DeviceConflictError(CardException):
    """Raised when a card is already bound to a different device."""

    def __init__(
        self,
        message: str = "Card is bound to another device",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code="DEVICE_CONFLICT", context=context)


class CardAlreadyUsedError(CardException):
    """Raised when a used card has no bound device and the policy rejects it."""

    def __init__(self, message: str = "Card has already been used", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CARD_ALREADY_USED", context=context)


class CardNotBoundError(CardException):
    """Raised when unbinding a card that has no bound device."""

    def __init__(self, message: str = "Card is not bound to any device"):
        super().__init__(message, code="CARD_NOT_BOUND")


class DuplicateCardKeyError(CardException):
    """Raised when the store rejects a card key that already exists."""

    def __init__(self, message: str = "Card key already exists", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="DUPLICATE_KEY", context=context)


class AdminPermissionError(DomainException):
    """Raised when an admin capability or shared-secret check fails."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, code="PERMISSION_DENIED")


class StoreFailureError(DomainException):
    """Raised when the persistence layer fails."""

    def __init__(self, message: str = "Card store is unavailable"):
        super().__init__(message, code="STORE_FAILURE")


class SoftwareVersionNotConfiguredError(DomainException):
    """Raised when no software version has been published yet."""

    def __init__(self, message: str = "Software version is not configured"):
        super().__init__(message, code="SOFTWARE_VERSION_NOT_FOUND")
