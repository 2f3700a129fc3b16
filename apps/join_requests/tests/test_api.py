import pytest

from apps.join_requests.models import JoinRequest
from apps.join_requests.services import workflow
from apps.trips.models import Trip

pytestmark = pytest.mark.django_db


def _join_url(trip):
    return f'/api/v1/trips/{trip.pk}/join/'


def _resolve_url(join_request):
    return f'/api/v1/join-requests/{join_request.pk}/'


class TestTripJoin:
    def test_request_to_join(self, client_for, make_user, make_trip):
        creator = make_user()
        sender = make_user(name='Ana', nationality='Brazil')
        trip = make_trip(creator)

        response = client_for(sender).post(_join_url(trip), {'message': 'Hi there'}, format='json')

        assert response.status_code == 201
        data = response.json()['data']
        assert data['status'] == 'PENDING'
        assert data['senderId'] == str(sender.pk)
        assert data['receiverId'] == str(creator.pk)
        assert data['sender']['nationality'] == 'Brazil'

    def test_blank_message(self, client_for, make_user, make_trip):
        trip = make_trip(make_user())

        response = client_for(make_user()).post(_join_url(trip), {'message': '   '}, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == {
            'code': 'validation_error',
            'message': 'A message is required when requesting to join a trip.',
        }

    def test_duplicate_is_a_conflict(self, client_for, make_user, make_trip):
        trip = make_trip(make_user())
        client = client_for(make_user())
        client.post(_join_url(trip), {'message': 'Hi'}, format='json')

        response = client.post(_join_url(trip), {'message': 'Hi again'}, format='json')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'conflict'

    def test_closed_trip_is_a_conflict(self, client_for, make_user, make_trip):
        trip = make_trip(make_user())
        Trip.objects.filter(pk=trip.pk).update(status=Trip.Status.CANCELLED)

        response = client_for(make_user()).post(_join_url(trip), {'message': 'Hi'}, format='json')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'conflict'

    def test_missing_trip(self, client_for, make_user):
        response = client_for(make_user()).post(
            '/api/v1/trips/00000000-0000-0000-0000-000000000000/join/',
            {'message': 'Hi'},
            format='json',
        )

        assert response.status_code == 404

    def test_requires_authentication(self, api_client, make_user, make_trip):
        trip = make_trip(make_user())

        response = api_client.post(_join_url(trip), {'message': 'Hi'}, format='json')

        assert response.status_code == 401
        assert not JoinRequest.objects.exists()

    def test_join_status(self, client_for, make_user, make_trip):
        trip = make_trip(make_user())
        sender = make_user()
        client = client_for(sender)

        assert client.get(_join_url(trip)).json()['data']['status'] == 'NOT_REQUESTED'

        client.post(_join_url(trip), {'message': 'Hi'}, format='json')

        data = client.get(_join_url(trip)).json()['data']
        assert data['status'] == 'REQUESTED'
        assert data['requestStatus'] == 'PENDING'


class TestCreatorViews:
    def test_pending_count_for_trip(self, client_for, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator, max_participants=4)
        workflow.request_to_join(trip.pk, make_user(), 'One')
        workflow.request_to_join(trip.pk, make_user(), 'Two')

        response = client_for(creator).get(f'/api/v1/trips/{trip.pk}/join/count/')

        assert response.json()['data'] == {'count': 2}

    def test_trip_requests_forbidden_for_others(self, client_for, make_user, make_trip):
        trip = make_trip(make_user())

        response = client_for(make_user()).get(f'/api/v1/trips/{trip.pk}/requests/')

        assert response.status_code == 403

    def test_trip_requests(self, client_for, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator)
        join_request = workflow.request_to_join(trip.pk, make_user(), 'Hi')

        response = client_for(creator).get(f'/api/v1/trips/{trip.pk}/requests/')

        assert response.status_code == 200
        assert [req['id'] for req in response.json()['data']] == [str(join_request.pk)]


class TestResolve:
    def test_accept_adds_participant(self, client_for, make_user, make_trip):
        creator = make_user()
        sender = make_user()
        trip = make_trip(creator)
        join_request = workflow.request_to_join(trip.pk, sender, 'Hi')
        client = client_for(creator)

        response = client.put(_resolve_url(join_request), {'status': 'ACCEPTED'}, format='json')

        assert response.status_code == 200
        assert response.json()['data']['status'] == 'ACCEPTED'
        trip_data = client.get(f'/api/v1/trips/{trip.pk}/').json()['data']
        assert trip_data['participantCount'] == 2
        assert trip_data['isFull'] is True
        assert trip_data['status'] == 'OPEN'

    def test_accept_on_full_trip(self, client_for, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator, max_participants=1)
        join_request = workflow.request_to_join(trip.pk, make_user(), 'Hi')

        response = client_for(creator).put(_resolve_url(join_request), {'status': 'ACCEPTED'}, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == {'code': 'conflict', 'message': 'This trip is full.'}
        join_request.refresh_from_db()
        assert join_request.status == JoinRequest.Status.PENDING
        assert trip.participants.count() == 1

    def test_second_resolution_is_rejected(self, client_for, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator)
        join_request = workflow.request_to_join(trip.pk, make_user(), 'Hi')
        client = client_for(creator)
        client.put(_resolve_url(join_request), {'status': 'REJECTED'}, format='json')

        response = client.put(_resolve_url(join_request), {'status': 'ACCEPTED'}, format='json')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'validation_error'
        join_request.refresh_from_db()
        assert join_request.status == JoinRequest.Status.REJECTED

    def test_invalid_status(self, client_for, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator)
        join_request = workflow.request_to_join(trip.pk, make_user(), 'Hi')

        response = client_for(creator).put(_resolve_url(join_request), {'status': 'MAYBE'}, format='json')

        assert response.status_code == 400
        assert 'status' in response.json()['error']['details']

    def test_sender_cannot_resolve(self, client_for, make_user, make_trip):
        sender = make_user()
        trip = make_trip(make_user())
        join_request = workflow.request_to_join(trip.pk, sender, 'Hi')

        response = client_for(sender).put(_resolve_url(join_request), {'status': 'ACCEPTED'}, format='json')

        assert response.status_code == 403


class TestOverview:
    def test_requests_overview(self, client_for, make_user, make_trip):
        creator = make_user()
        trip = make_trip(creator, title='Atlas mountains', max_participants=4)
        pending = workflow.request_to_join(trip.pk, make_user(), 'Pending one')
        rejected = workflow.request_to_join(trip.pk, make_user(), 'Rejected one')
        workflow.resolve_request(rejected.pk, creator, JoinRequest.Status.REJECTED)

        data = client_for(creator).get('/api/v1/requests/').json()['data']

        assert [req['id'] for req in data['pendingRequests']] == [str(pending.pk)]
        assert data['pendingRequests'][0]['trip']['title'] == 'Atlas mountains'
        assert [req['id'] for req in data['previousRequests']] == [str(rejected.pk)]
        assert data['createdTrips'] == [{
            'id': str(trip.pk),
            'title': 'Atlas mountains',
            'destination': trip.destination,
            'pendingRequestsCount': 1,
        }]

    def test_pending_count(self, client_for, make_user, make_trip):
        creator = make_user()
        workflow.request_to_join(make_trip(creator).pk, make_user(), 'Hi')
        workflow.request_to_join(make_trip(creator).pk, make_user(), 'Hi')

        response = client_for(creator).get('/api/v1/requests/pending-count/')

        assert response.json()['data'] == {'count': 2}
