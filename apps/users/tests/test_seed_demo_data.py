from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from apps.join_requests.models import JoinRequest
from apps.messaging.models import Message
from apps.trips.models import Participation, Trip

User = get_user_model()

pytestmark = pytest.mark.django_db


def _seed(*args):
    call_command('seed_demo_data', *args, stdout=StringIO())


def test_seeds_every_model():
    _seed()

    assert User.objects.count() == 5
    assert Trip.objects.count() == 3
    assert JoinRequest.objects.filter(status=JoinRequest.Status.PENDING).count() == 2
    assert JoinRequest.objects.filter(status=JoinRequest.Status.ACCEPTED).count() == 1
    assert JoinRequest.objects.filter(status=JoinRequest.Status.REJECTED).count() == 1
    # Three creators plus one accepted request
    assert Participation.objects.count() == 4
    # Three direct messages plus one join notice per request
    assert Message.objects.count() == 7
    assert User.objects.get(email='admin@travelbuddy.app').is_superuser


def test_running_twice_does_not_duplicate():
    _seed()
    _seed()

    assert User.objects.count() == 5
    assert Trip.objects.count() == 3
    assert JoinRequest.objects.count() == 4
    # Three direct messages plus one join notice per request
    assert Message.objects.count() == 7


def test_reset_starts_over():
    _seed()
    first_ids = set(User.objects.values_list('pk', flat=True))

    _seed('--reset')

    assert User.objects.count() == 5
    assert first_ids.isdisjoint(User.objects.values_list('pk', flat=True))
