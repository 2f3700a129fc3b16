"""
Join-request workflow.

A request starts PENDING and is resolved once, by the trip creator, to
ACCEPTED or REJECTED. Accepting puts the sender on the trip roster, and is
refused once the roster has reached ``max_participants``. The trip status is
never touched here: a trip stays OPEN until its creator changes it, so requests
are still taken at capacity.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from apps.join_requests.models import JoinRequest
from apps.messaging.services import conversations
from apps.trips.models import Trip
from apps.trips.services import roster
from apps.trips.services.registry import get_trip_or_404
from common.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

PREVIOUS_REQUESTS_LIMIT = 10
RESOLVED_STATUSES = (JoinRequest.Status.ACCEPTED, JoinRequest.Status.REJECTED)
JOIN_NOTICE = (
    "Hi! I've sent a request to join your trip to {destination}. "
    'Looking forward to your response!'
)


def request_to_join(trip_id, sender, message):
    """
    Ask to join a trip.

    The creator also gets a direct message pointing at the new request, sent
    in the same transaction.

    Raises:
        NotFoundError: no such trip.
        ConflictError: the trip is not OPEN, *sender* is already on the
            roster, or *sender* already has a PENDING request for it.
        ValidationError: *message* is empty or whitespace.
    """
    trip = get_trip_or_404(trip_id)

    if trip.status != Trip.Status.OPEN:
        raise ConflictError('This trip is not open for new participants.')

    if roster.is_participant(sender, trip):
        raise ConflictError('You are already a participant in this trip.')

    if JoinRequest.objects.filter(trip=trip, sender=sender, status=JoinRequest.Status.PENDING).exists():
        raise ConflictError('You already have a pending request for this trip.')

    if message is None or not str(message).strip():
        raise ValidationError('A message is required when requesting to join a trip.')

    try:
        with transaction.atomic():
            join_request = JoinRequest.objects.create(
                trip=trip,
                sender=sender,
                receiver=trip.creator,
                message=str(message).strip(),
            )
            conversations.send_message(
                sender,
                trip.creator_id,
                JOIN_NOTICE.format(destination=trip.destination),
            )
    except IntegrityError:
        # Lost a race against a concurrent request from the same sender
        raise ConflictError('You already have a pending request for this trip.')

    logger.info('Join request %s sent by %s for trip %s', join_request.pk, sender.pk, trip.pk)
    return join_request


def list_requests_for_trip(trip_id, caller):
    """
    All join requests for a trip, most recent first. Creator only.
    """
    trip = get_trip_or_404(trip_id)
    if trip.creator_id != caller.id:
        raise AuthorizationError('Only the trip creator can view join requests.')
    return (
        JoinRequest.objects.filter(trip=trip)
        .select_related('sender')
        .order_by('-created_at')
    )


def pending_count_for_trip(trip_id, caller):
    trip = get_trip_or_404(trip_id)
    if trip.creator_id != caller.id:
        raise AuthorizationError('Not authorized to view these requests.')
    return JoinRequest.objects.filter(trip=trip, status=JoinRequest.Status.PENDING).count()


def resolve_request(request_id, caller, new_status):
    """
    Accept or reject a PENDING request.

    Accepting adds the sender to the roster in the same transaction; an
    existing roster entry is left as is. The trip row is locked while the
    head count is checked, so the roster never grows past
    ``max_participants``.

    Raises:
        NotFoundError: no such request.
        AuthorizationError: *caller* did not create the trip.
        ValidationError: *new_status* is not ACCEPTED/REJECTED, or the
            request was already resolved.
        ConflictError: accepting would put the trip over capacity. The
            request stays PENDING.
    """
    try:
        join_request = JoinRequest.objects.select_related('trip', 'sender').get(pk=request_id)
    except JoinRequest.DoesNotExist:
        raise NotFoundError('Join request not found.')

    if join_request.trip.creator_id != caller.id:
        raise AuthorizationError('Only the trip creator can respond to join requests.')

    if new_status not in RESOLVED_STATUSES:
        raise ValidationError('Status must be ACCEPTED or REJECTED.')

    with transaction.atomic():
        # Lock order: trip, then request
        trip = Trip.objects.select_for_update().get(pk=join_request.trip_id)
        locked = JoinRequest.objects.select_for_update().get(pk=join_request.pk)
        if not locked.is_pending:
            raise ValidationError(f'This request has already been {locked.status.lower()}.')

        if new_status == JoinRequest.Status.ACCEPTED:
            sender = join_request.sender
            if not roster.is_participant(sender, trip) and roster.is_full(trip):
                raise ConflictError('This trip is full.')
            roster.add_participant(sender, trip)

        locked.status = new_status
        locked.save(update_fields=['status', 'updated_at'])

    logger.info('Join request %s %s by %s', locked.pk, new_status, caller.pk)
    return locked


def join_status(trip_id, user):
    """
    Describe where *user* stands with a trip: JOINED, REQUESTED or NOT_REQUESTED.
    """
    trip = get_trip_or_404(trip_id)
    if roster.is_participant(user, trip):
        return {
            'status': 'JOINED',
            'message': 'You are already a member of this trip.',
        }

    latest = (
        JoinRequest.objects.filter(trip=trip, sender=user)
        .order_by('-created_at')
        .first()
    )
    if latest is not None:
        return {
            'status': 'REQUESTED',
            'message': 'You have already requested to join this trip.',
            'requestStatus': latest.status,
        }

    return {
        'status': 'NOT_REQUESTED',
        'message': 'You have not requested to join this trip.',
    }


def requests_overview(user):
    """
    Requests received by *user* as a trip creator.

    Returns a dict with ``pending`` (newest first), ``previous`` (the
    most recently resolved, capped at ten) and ``created_trips`` (annotated
    with ``pending_requests_count``).
    """
    received = JoinRequest.objects.filter(receiver=user).select_related('sender', 'trip')
    pending = received.filter(status=JoinRequest.Status.PENDING).order_by('-created_at')
    previous = (
        received.exclude(status=JoinRequest.Status.PENDING)
        .order_by('-updated_at')[:PREVIOUS_REQUESTS_LIMIT]
    )
    created_trips = Trip.objects.filter(creator=user).annotate(
        pending_requests_count=Count(
            'join_requests',
            filter=Q(join_requests__status=JoinRequest.Status.PENDING),
        ),
    )
    return {
        'pending': pending,
        'previous': previous,
        'created_trips': created_trips,
    }


def pending_count(user):
    """PENDING requests waiting on *user*'s decision."""
    return JoinRequest.objects.filter(receiver=user, status=JoinRequest.Status.PENDING).count()


def pending_requests_sent(user):
    return (
        JoinRequest.objects.filter(sender=user, status=JoinRequest.Status.PENDING)
        .select_related('trip__creator')
        .order_by('-created_at')
    )
