"""
CheckHwidQuery.

Query to inspect every card bound to a device.
"""
from dataclasses import dataclass


@dataclass
class CheckHwidQuery:
    """Query cards bound to a hardware id."""

    hwid: str
