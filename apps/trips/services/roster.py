"""
Participation roster helpers.

The roster (``Participation`` rows) is the authoritative head count of a
trip. ``Trip.status`` is set by the creator and may lag behind it, so
fullness is always recomputed from the roster.
"""
import logging

from apps.trips.models import Participation

logger = logging.getLogger(__name__)


def is_participant(user, trip):
    """Return True if *user* has a roster entry on *trip*."""
    if user is None or not getattr(user, 'is_authenticated', True):
        return False
    return Participation.objects.filter(trip=trip, user=user).exists()


def add_participant(user, trip):
    """
    Add *user* to the roster of *trip*.

    Idempotent: an existing entry is returned untouched.

    Returns:
        ``(participation, created)``
    """
    participation, created = Participation.objects.get_or_create(trip=trip, user=user)
    if created:
        logger.info('User %s joined trip %s', user.pk, trip.pk)
    return participation, created


def roster_size(trip):
    return Participation.objects.filter(trip=trip).count()


def is_full(trip):
    return roster_size(trip) >= trip.max_participants
