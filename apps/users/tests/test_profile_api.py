from datetime import date, timedelta

import pytest
from django.utils import timezone

from apps.join_requests.services import workflow
from apps.trips.models import Trip

pytestmark = pytest.mark.django_db

PROFILE_URL = '/api/v1/users/profile/'
USER_TRIPS_URL = '/api/v1/users/trips/'
CHANGE_PASSWORD_URL = '/api/v1/users/change-password/'


class TestOwnProfile:
    def test_get_profile(self, client_for, make_user):
        user = make_user(name='Lucas Moreau', nationality='France', languages=['French'])

        response = client_for(user).get(PROFILE_URL)

        assert response.status_code == 200
        data = response.json()['data']
        assert data['id'] == str(user.pk)
        assert data['name'] == 'Lucas Moreau'
        assert data['nationality'] == 'France'
        assert data['languages'] == ['French']

    def test_anonymous_is_rejected(self, api_client):
        response = api_client.get(PROFILE_URL)

        assert response.status_code == 401

    def test_patch_updates_only_given_fields(self, client_for, make_user):
        user = make_user(name='Lucas Moreau', nationality='France')

        response = client_for(user).patch(
            PROFILE_URL,
            {'bio': 'Slow traveller.', 'languages': ['French', 'Spanish']},
            format='json',
        )

        assert response.status_code == 200
        user.refresh_from_db()
        assert user.bio == 'Slow traveller.'
        assert user.languages == ['French', 'Spanish']
        assert user.nationality == 'France'
        assert user.name == 'Lucas Moreau'

    def test_put_requires_name(self, client_for, make_user):
        user = make_user()

        response = client_for(user).put(PROFILE_URL, {'bio': 'No name given'}, format='json')

        assert response.status_code == 400
        assert 'name' in response.json()['error']['details']

    def test_put_updates_profile(self, client_for, make_user):
        user = make_user()

        response = client_for(user).put(
            PROFILE_URL,
            {
                'name': 'Ana Silva',
                'dateOfBirth': '1994-03-02',
                'profileImage': 'https://img.example.com/ana.jpg',
            },
            format='json',
        )

        assert response.status_code == 200
        assert response.json()['data']['profileImage'] == 'https://img.example.com/ana.jpg'
        user.refresh_from_db()
        assert user.name == 'Ana Silva'
        assert user.date_of_birth == date(1994, 3, 2)


class TestPublicProfile:
    def test_shows_three_most_recent_open_trips(self, api_client, make_user, make_trip):
        user = make_user(name='Maya Chen')
        trips = [make_trip(user, title=f'Trip {n}') for n in range(4)]
        base = timezone.now()
        for n, trip in enumerate(trips):
            Trip.objects.filter(pk=trip.pk).update(created_at=base + timedelta(minutes=n))
        Trip.objects.filter(pk=trips[3].pk).update(status=Trip.Status.CANCELLED)

        response = api_client.get(f'/api/v1/users/{user.pk}/')

        assert response.status_code == 200
        data = response.json()['data']
        assert data['name'] == 'Maya Chen'
        assert 'email' not in data
        assert [trip['title'] for trip in data['createdTrips']] == ['Trip 2', 'Trip 1', 'Trip 0']

    def test_unknown_user(self, api_client):
        response = api_client.get('/api/v1/users/00000000-0000-0000-0000-000000000000/')

        assert response.status_code == 404
        assert response.json()['error']['code'] == 'not_found'


class TestUserTrips:
    def test_lists_created_joined_and_pending(self, client_for, make_user, make_trip):
        maya = make_user(name='Maya')
        lucas = make_user(name='Lucas')
        own_trip = make_trip(maya, title='Maya goes north')
        joined_trip = make_trip(lucas, title='Lucas goes south')
        pending_trip = make_trip(lucas, title='Lucas goes east')

        accepted = workflow.request_to_join(joined_trip.pk, maya, 'Count me in')
        workflow.resolve_request(accepted.pk, lucas, 'ACCEPTED')
        workflow.request_to_join(pending_trip.pk, maya, 'Me too')

        response = client_for(maya).get(USER_TRIPS_URL)

        assert response.status_code == 200
        data = response.json()['data']
        assert [trip['id'] for trip in data['created']] == [str(own_trip.pk)]
        assert data['created'][0]['isCreator'] is True
        assert [trip['id'] for trip in data['joined']] == [str(joined_trip.pk)]
        assert data['joined'][0]['isCreator'] is False
        assert data['joined'][0]['participantCount'] == 2
        assert data['joined'][0]['joinedAt'] is not None
        assert [req['tripId'] for req in data['pendingRequests']] == [str(pending_trip.pk)]
        assert data['pendingRequests'][0]['status'] == 'PENDING'


class TestChangePassword:
    def test_changes_password(self, client_for, make_user, password):
        user = make_user()

        response = client_for(user).post(
            CHANGE_PASSWORD_URL,
            {'oldPassword': password, 'newPassword': 'Another-Journey-77'},
            format='json',
        )

        assert response.status_code == 200
        user.refresh_from_db()
        assert user.check_password('Another-Journey-77')

    def test_wrong_old_password(self, client_for, make_user, password):
        user = make_user()

        response = client_for(user).post(
            CHANGE_PASSWORD_URL,
            {'oldPassword': 'not-it', 'newPassword': 'Another-Journey-77'},
            format='json',
        )

        assert response.status_code == 400
        assert 'oldPassword' in response.json()['error']['details']
        user.refresh_from_db()
        assert user.check_password(password)
