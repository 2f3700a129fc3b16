"""
Trip registry: creation, lookup, filtering, editing and deletion of trips.

Every function raises the domain exceptions from ``common.exceptions``;
views translate nothing themselves.
"""
import logging

from django.db import transaction

from apps.join_requests.models import JoinRequest
from apps.trips.filters import TripFilter
from apps.trips.models import Participation, Trip
from apps.trips.services import roster
from common.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('title', 'destination', 'start_date', 'end_date', 'description')
EDITABLE_FIELDS = REQUIRED_FIELDS + (
    'activities',
    'image_url',
    'max_participants',
    'status',
)
DEFAULT_MAX_PARTICIPANTS = 2


def _is_blank(value):
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _check_dates(start_date, end_date):
    if end_date <= start_date:
        raise ValidationError({'endDate': 'End date must be after start date.'})


def _check_capacity(max_participants):
    if max_participants is None or max_participants < 1:
        raise ValidationError({'maxParticipants': 'A trip needs room for at least one participant.'})


def _trip_queryset():
    return Trip.objects.select_related('creator').prefetch_related('participants__user')


def get_trip_or_404(trip_id):
    try:
        return _trip_queryset().get(pk=trip_id)
    except Trip.DoesNotExist:
        raise NotFoundError('Trip not found.')


def create_trip(creator, attrs):
    """
    Create a trip owned by *creator* and put the creator on its roster.

    Both rows are written in one transaction.

    Args:
        creator: The authenticated ``User``.
        attrs: Trip fields keyed by model field name.

    Raises:
        ValidationError: a required field is missing or the dates are out of order.
    """
    missing = [name for name in REQUIRED_FIELDS if _is_blank(attrs.get(name))]
    if missing:
        raise ValidationError({name: 'This field is required.' for name in missing})

    _check_dates(attrs['start_date'], attrs['end_date'])
    max_participants = attrs.get('max_participants')
    if max_participants is None:
        max_participants = DEFAULT_MAX_PARTICIPANTS
    _check_capacity(max_participants)

    with transaction.atomic():
        trip = Trip.objects.create(
            creator=creator,
            title=attrs['title'].strip(),
            destination=attrs['destination'].strip(),
            start_date=attrs['start_date'],
            end_date=attrs['end_date'],
            description=attrs['description'],
            activities=list(attrs.get('activities') or []),
            image_url=attrs.get('image_url') or '',
            max_participants=max_participants,
            status=Trip.Status.OPEN,
        )
        roster.add_participant(creator, trip)

    logger.info('Trip %s created by %s', trip.pk, creator.pk)
    return trip


def list_trips(filters=None):
    """
    Return OPEN trips matching *filters*, newest first.

    *filters* is a mapping such as ``request.query_params`` with optional
    ``destination``, ``startDate`` and ``endDate`` keys.
    """
    queryset = _trip_queryset().filter(status=Trip.Status.OPEN).order_by('-created_at')
    filterset = TripFilter(filters or {}, queryset=queryset)
    if not filterset.is_valid():
        raise ValidationError(filterset.errors)
    return filterset.qs


def get_trip(trip_id, viewer=None):
    """
    Return ``(trip, flags)`` where *flags* describe the trip relative to
    *viewer*. *flags* is empty for anonymous viewers.
    """
    trip = get_trip_or_404(trip_id)
    return trip, viewer_flags(trip, viewer)


def viewer_flags(trip, viewer):
    if viewer is None or not viewer.is_authenticated:
        return {}

    latest_request = (
        JoinRequest.objects.filter(trip=trip, sender=viewer)
        .order_by('-created_at')
        .first()
    )
    return {
        'isCreator': trip.creator_id == viewer.id,
        'isParticipant': roster.is_participant(viewer, trip),
        'hasRequested': latest_request is not None,
        'requestStatus': latest_request.status if latest_request else None,
    }


def update_trip(trip_id, caller, attrs):
    """
    Apply a partial update to a trip. Only the creator may edit.

    Raises:
        NotFoundError: no such trip.
        AuthorizationError: *caller* is not the creator.
        ValidationError: capacity below the roster size, dates out of order,
            a required field blanked, or an unknown status.
    """
    trip = get_trip_or_404(trip_id)
    if trip.creator_id != caller.id:
        raise AuthorizationError('You are not authorized to update this trip.')

    changes = {name: value for name, value in attrs.items() if name in EDITABLE_FIELDS}

    blanked = [name for name in REQUIRED_FIELDS if name in changes and _is_blank(changes[name])]
    if blanked:
        raise ValidationError({name: 'This field may not be blank.' for name in blanked})

    if 'status' in changes and changes['status'] not in Trip.Status.values:
        raise ValidationError({'status': f'"{changes["status"]}" is not a valid trip status.'})

    _check_dates(
        changes.get('start_date', trip.start_date),
        changes.get('end_date', trip.end_date),
    )

    if 'max_participants' in changes:
        _check_capacity(changes['max_participants'])

    with transaction.atomic():
        # resolve_request takes the same lock before counting the roster
        trip = Trip.objects.select_for_update().get(pk=trip.pk)
        if 'max_participants' in changes and changes['max_participants'] < roster.roster_size(trip):
            raise ValidationError({
                'maxParticipants': 'Maximum participants cannot be less than current participants count.',
            })

        for name, value in changes.items():
            if name == 'activities':
                value = list(value or [])
            elif name == 'image_url':
                value = value or ''
            setattr(trip, name, value)
        trip.save()

    logger.info('Trip %s updated by %s (%s)', trip.pk, caller.pk, ', '.join(sorted(changes)))
    return get_trip_or_404(trip.pk)


def delete_trip(trip_id, caller):
    """
    Delete a trip with its join requests and roster in one transaction.

    Raises:
        NotFoundError: no such trip.
        AuthorizationError: *caller* is not the creator.
    """
    trip = get_trip_or_404(trip_id)
    if trip.creator_id != caller.id:
        raise AuthorizationError('You are not authorized to delete this trip.')

    with transaction.atomic():
        JoinRequest.objects.filter(trip=trip).delete()
        Participation.objects.filter(trip=trip).delete()
        trip.delete()

    logger.info('Trip %s deleted by %s', trip_id, caller.pk)


def trips_for_user(user):
    """
    Return ``(created, joined)``: trips *user* created, and roster entries
    on trips created by someone else. Both ordered by trip start date.
    """
    created = _trip_queryset().filter(creator=user).order_by('start_date')
    joined = (
        Participation.objects.filter(user=user)
        .exclude(trip__creator=user)
        .select_related('trip__creator')
        .prefetch_related('trip__participants__user')
        .order_by('trip__start_date')
    )
    return created, joined
