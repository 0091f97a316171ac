"""
UnbindCardCommand.

Command to release a card from its bound device.
"""

from dataclasses import dataclass


@dataclass
class UnbindCardCommand:
    """
    Command to unbind a card.

    admin_key is compared against the configured unbind secret.
    """

    card_id: str
    admin_key: str
