"""
Model registration for the cards app.
"""
from cards.infrastructure.models import Card  # noqa: F401
