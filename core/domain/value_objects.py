"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum

HWID_PATTERN = re.compile(r"[a-f0-9]{32}", re.IGNORECASE)

# x.y.z with optional pre-release and build metadata
SEMVER_PATTERN = re.compile(
    r"\d+\.\d+\.\d+(-[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*)?(\+[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*)?"
)

CARD_KEY_MIN_LENGTH = 8
CARD_KEY_MAX_LENGTH = 64


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True, eq=False)
class HardwareId(ValueObject):
    """
    Hardware fingerprint of a device.

    32 hexadecimal characters, stored lowercase. Input is accepted
    in any case.
    """

    value: str

    def __post_init__(self):
        """Validate and normalise HWID format."""
        if not isinstance(self.value, str) or not HWID_PATTERN.fullmatch(self.value):
            raise ValueError("HWID must be 32 hexadecimal characters")
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self) -> str:
        """Return HWID as string."""
        return self.value


@dataclass(frozen=True, eq=False)
class CardKey(ValueObject):
    """Card key as presented by a client."""

    value: str

    def __post_init__(self):
        """Validate key length."""
        if not isinstance(self.value, str):
            raise ValueError("Card key must be a string")
        if not CARD_KEY_MIN_LENGTH <= len(self.value) <= CARD_KEY_MAX_LENGTH:
            raise ValueError(
                f"Card key must be {CARD_KEY_MIN_LENGTH}-{CARD_KEY_MAX_LENGTH} characters"
            )

    def __str__(self) -> str:
        """Return key as string."""
        return self.value


class CardStatus(Enum):
    """Card lifecycle status."""

    UNUSED = "unused"
    USED = "used"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


@dataclass(frozen=True, eq=False)
class SemanticVersion(ValueObject):
    """Published software version, e.g. 1.0.0 or 1.2.3-beta.1."""

    value: str

    def __post_init__(self):
        """Validate semantic version format."""
        if not isinstance(self.value, str) or not SEMVER_PATTERN.fullmatch(self.value):
            raise ValueError(
                "Version must follow semantic versioning (e.g. 1.0.0, 1.0.0-beta.1)"
            )

    def __str__(self) -> str:
        return self.value
