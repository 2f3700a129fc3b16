"""
Shared pytest fixtures for the TravelBuddy test suite.
"""
import itertools
from datetime import date

import pytest
from rest_framework.test import APIClient

TEST_PASSWORD = 'Wander-Lust-2024!'


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def password():
    return TEST_PASSWORD


@pytest.fixture
def make_user(db):
    """Factory creating active users with ``TEST_PASSWORD``."""
    from django.contrib.auth import get_user_model

    from apps.users.utils import generate_username

    User = get_user_model()
    counter = itertools.count(1)

    def _make_user(name=None, email=None, **extra):
        n = next(counter)
        email = email or f'traveller{n}@example.com'
        user = User(
            email=email,
            username=generate_username(email),
            name=name or f'Traveller {n}',
            **extra,
        )
        user.set_password(TEST_PASSWORD)
        user.save()
        return user

    return _make_user


@pytest.fixture
def make_trip(db):
    """Factory creating trips through the registry, so the creator is on the roster."""
    from apps.trips.services import registry

    def _make_trip(creator, **overrides):
        attrs = {
            'title': 'Island hopping',
            'destination': 'Cyclades, Greece',
            'start_date': date(2027, 6, 1),
            'end_date': date(2027, 6, 14),
            'description': 'Ferries between Naxos, Paros and Milos.',
            'activities': ['Swimming', 'Hiking'],
            'max_participants': 2,
        }
        attrs.update(overrides)
        return registry.create_trip(creator, attrs)

    return _make_trip


@pytest.fixture
def client_for():
    """Return an ``APIClient`` authenticated as the given user."""

    def _client_for(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client_for
