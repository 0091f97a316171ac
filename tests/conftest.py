"""
Pytest configuration and shared fixtures.
"""

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from cards.infrastructure.repositories.django_card_repository import DjangoCardRepository
from support.factories import ADMIN_API_KEY, make_bound_card, make_card
from support.in_memory import InMemoryCardRepository, RecordingExpiryDispatcher


@pytest.fixture
def card_repository():
    """Fixture for the in-memory CardRepository."""
    return InMemoryCardRepository()


@pytest.fixture
def expiry_dispatcher():
    """Fixture for a recording ExpiryDispatcher."""
    return RecordingExpiryDispatcher()


@pytest.fixture
def django_card_repository():
    """Fixture for the Django CardRepository."""
    return DjangoCardRepository()


@pytest.fixture
def now():
    """Fixed reference time."""
    return timezone.now()


@pytest.fixture
def unused_card(card_repository):
    """Fixture for an unused card stored in the in-memory repository."""
    return card_repository.add(make_card())


@pytest.fixture
def bound_card(card_repository):
    """Fixture for a card bound to HWID_A stored in the in-memory repository."""
    return card_repository.add(make_bound_card())


@pytest.fixture
def db_card(db, django_card_repository):
    """Fixture for an unused Card saved in database."""
    return async_to_sync(django_card_repository.create)(make_card())


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client(api_client):
    """Fixture for an API client carrying the admin API key."""
    api_client.credentials(HTTP_X_ADMIN_KEY=ADMIN_API_KEY)
    return api_client
