from datetime import date, timedelta

import pytest
from django.utils import timezone

from apps.join_requests.models import JoinRequest
from apps.join_requests.services import workflow
from apps.trips.models import Participation, Trip
from apps.trips.services import registry, roster
from common.exceptions import AuthorizationError, NotFoundError, ValidationError

pytestmark = pytest.mark.django_db

MISSING_TRIP_ID = '00000000-0000-0000-0000-000000000000'


def _attrs(**overrides):
    attrs = {
        'title': 'Rice terraces',
        'destination': 'Banaue, Philippines',
        'start_date': date(2027, 2, 1),
        'end_date': date(2027, 2, 8),
        'description': 'A week in the Cordilleras.',
    }
    attrs.update(overrides)
    return attrs


class TestCreateTrip:
    def test_creator_is_first_participant(self, make_user):
        creator = make_user()

        trip = registry.create_trip(creator, _attrs())

        assert trip.status == Trip.Status.OPEN
        assert trip.max_participants == registry.DEFAULT_MAX_PARTICIPANTS
        assert trip.activities == []
        assert roster.is_participant(creator, trip)
        assert roster.roster_size(trip) == 1

    def test_missing_required_fields(self, make_user):
        creator = make_user()

        with pytest.raises(ValidationError) as excinfo:
            registry.create_trip(creator, _attrs(title='  ', description=None))

        assert set(excinfo.value.detail) == {'title', 'description'}
        assert not Trip.objects.exists()
        assert not Participation.objects.exists()

    @pytest.mark.parametrize('end_date', [date(2027, 2, 1), date(2027, 1, 20)])
    def test_end_must_follow_start(self, make_user, end_date):
        creator = make_user()

        with pytest.raises(ValidationError):
            registry.create_trip(creator, _attrs(end_date=end_date))

        assert not Trip.objects.exists()

    def test_zero_capacity(self, make_user):
        with pytest.raises(ValidationError):
            registry.create_trip(make_user(), _attrs(max_participants=0))


class TestListTrips:
    def test_only_open_trips_newest_first(self, make_user, make_trip):
        creator = make_user()
        older = make_trip(creator, title='Older')
        newer = make_trip(creator, title='Newer')
        cancelled = make_trip(creator, title='Cancelled')
        Trip.objects.filter(pk=cancelled.pk).update(status=Trip.Status.CANCELLED)
        Trip.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(days=1))

        trips = list(registry.list_trips())

        assert trips == [newer, older]

    def test_destination_is_case_insensitive_substring(self, make_user, make_trip):
        creator = make_user()
        lisbon = make_trip(creator, destination='Lisbon, Portugal')
        make_trip(creator, destination='Porto, Portugal')
        make_trip(creator, destination='Madrid, Spain')

        assert list(registry.list_trips({'destination': 'LISBON'})) == [lisbon]
        assert len(registry.list_trips({'destination': 'portugal'})) == 2

    def test_date_bounds(self, make_user, make_trip):
        creator = make_user()
        early = make_trip(creator, start_date=date(2027, 3, 1), end_date=date(2027, 3, 10))
        late = make_trip(creator, start_date=date(2027, 5, 1), end_date=date(2027, 5, 20))

        assert list(registry.list_trips({'startDate': '2027-04-01'})) == [late]
        assert list(registry.list_trips({'endDate': '2027-03-10'})) == [early]
        assert list(registry.list_trips({'startDate': '2027-03-01', 'endDate': '2027-05-19'})) == [early]

    def test_invalid_filter(self):
        with pytest.raises(ValidationError):
            registry.list_trips({'startDate': 'next tuesday'})


class TestGetTrip:
    def test_flags_for_creator(self, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator)

        _, flags = registry.get_trip(trip.pk, viewer=creator)

        assert flags == {
            'isCreator': True,
            'isParticipant': True,
            'hasRequested': False,
            'requestStatus': None,
        }

    def test_flags_for_requester(self, make_user, make_trip):
        creator = make_user()
        visitor = make_user()
        trip = make_trip(creator)
        workflow.request_to_join(trip.pk, visitor, 'Hello!')

        _, flags = registry.get_trip(trip.pk, viewer=visitor)

        assert flags['isCreator'] is False
        assert flags['isParticipant'] is False
        assert flags['hasRequested'] is True
        assert flags['requestStatus'] == JoinRequest.Status.PENDING

    def test_no_flags_without_viewer(self, make_user, make_trip):
        trip = make_trip(make_user())

        fetched, flags = registry.get_trip(trip.pk)

        assert fetched == trip
        assert flags == {}

    def test_missing_trip(self):
        with pytest.raises(NotFoundError):
            registry.get_trip(MISSING_TRIP_ID)


class TestUpdateTrip:
    def test_only_creator_may_update(self, make_user, make_trip):
        trip = make_trip(make_user())

        with pytest.raises(AuthorizationError):
            registry.update_trip(trip.pk, make_user(), {'title': 'Hijacked'})

        trip.refresh_from_db()
        assert trip.title != 'Hijacked'

    def test_capacity_cannot_drop_below_roster(self, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator, max_participants=3)
        roster.add_participant(make_user(), trip)

        with pytest.raises(ValidationError):
            registry.update_trip(trip.pk, creator, {'max_participants': 1})

        updated = registry.update_trip(trip.pk, creator, {'max_participants': 2})
        assert updated.max_participants == 2
        assert updated.is_full

    def test_partial_update_keeps_other_fields(self, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator, title='Before', destination='Nowhere')

        updated = registry.update_trip(trip.pk, creator, {'title': 'After', 'status': Trip.Status.FULL})

        assert updated.title == 'After'
        assert updated.destination == 'Nowhere'
        assert updated.status == Trip.Status.FULL

    def test_dates_checked_against_stored_values(self, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator, start_date=date(2027, 6, 1), end_date=date(2027, 6, 14))

        with pytest.raises(ValidationError):
            registry.update_trip(trip.pk, creator, {'end_date': date(2027, 5, 30)})

    def test_unknown_status(self, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator)

        with pytest.raises(ValidationError):
            registry.update_trip(trip.pk, creator, {'status': 'ARCHIVED'})


class TestDeleteTrip:
    def test_removes_requests_and_roster(self, make_user, make_trip):
        creator = make_user()
        joiner = make_user()
        waiting = make_user()
        trip = make_trip(creator, max_participants=3)
        accepted = workflow.request_to_join(trip.pk, joiner, 'Hi')
        workflow.resolve_request(accepted.pk, creator, JoinRequest.Status.ACCEPTED)
        workflow.request_to_join(trip.pk, waiting, 'Me as well')
        trip_id = trip.pk

        registry.delete_trip(trip_id, creator)

        assert not Trip.objects.filter(pk=trip_id).exists()
        assert not JoinRequest.objects.filter(trip_id=trip_id).exists()
        assert not Participation.objects.filter(trip_id=trip_id).exists()

    def test_only_creator_may_delete(self, make_user, make_trip):
        trip = make_trip(make_user())

        with pytest.raises(AuthorizationError):
            registry.delete_trip(trip.pk, make_user())

        assert Trip.objects.filter(pk=trip.pk).exists()
        assert Participation.objects.filter(trip=trip).count() == 1


class TestTripsForUser:
    def test_joined_excludes_own_trips(self, make_user, make_trip):
        user = make_user()
        other = make_user()
        own = make_trip(user)
        theirs = make_trip(other)
        roster.add_participant(user, theirs)

        created, joined = registry.trips_for_user(user)

        assert list(created) == [own]
        assert [participation.trip for participation in joined] == [theirs]
