"""
Management command to seed realistic demo data for TravelBuddy.

Creates travellers, open trips, join requests in every state and a couple
of conversations so the app and the admin both show meaningful data.

Usage:
    python manage.py seed_demo_data
    python manage.py seed_demo_data --reset  # wipe existing demo data first
"""
from datetime import date

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.join_requests.models import JoinRequest
from apps.join_requests.services import workflow
from apps.messaging.models import Message
from apps.messaging.services import conversations
from apps.trips.models import Participation, Trip
from apps.trips.services import registry
from apps.users.utils import generate_username

User = get_user_model()

DEMO_PASSWORD = 'TravelBuddy2024Demo'

DEMO_USERS = [
    {'email': 'admin@travelbuddy.app', 'name': 'Admin', 'nationality': 'Canada',
     'languages': ['English', 'French'], 'is_staff': True, 'is_superuser': True},
    {'email': 'maya.chen@travelbuddy.app', 'name': 'Maya Chen', 'nationality': 'Singapore',
     'languages': ['English', 'Mandarin'], 'is_staff': False, 'is_superuser': False},
    {'email': 'lucas.moreau@travelbuddy.app', 'name': 'Lucas Moreau', 'nationality': 'France',
     'languages': ['French', 'English', 'Spanish'], 'is_staff': False, 'is_superuser': False},
    {'email': 'ana.silva@travelbuddy.app', 'name': 'Ana Silva', 'nationality': 'Brazil',
     'languages': ['Portuguese', 'English'], 'is_staff': False, 'is_superuser': False},
    {'email': 'jonas.berg@travelbuddy.app', 'name': 'Jonas Berg', 'nationality': 'Norway',
     'languages': ['Norwegian', 'English', 'German'], 'is_staff': False, 'is_superuser': False},
]

DEMO_TRIPS = [
    {
        'creator': 'maya.chen@travelbuddy.app',
        'title': 'Backpacking Northern Vietnam',
        'destination': 'Hanoi, Vietnam',
        'start_date': date(2026, 11, 10),
        'end_date': date(2026, 11, 24),
        'description': 'Two weeks from Hanoi up to Sapa and Ha Giang, then down to Ha Long Bay.',
        'activities': ['Trekking', 'Street food tours', 'Motorbike loop'],
        'max_participants': 4,
    },
    {
        'creator': 'lucas.moreau@travelbuddy.app',
        'title': 'Patagonia W Trek',
        'destination': 'Torres del Paine, Chile',
        'start_date': date(2026, 12, 2),
        'end_date': date(2026, 12, 9),
        'description': 'Camping the W circuit. Looking for someone with hiking experience.',
        'activities': ['Hiking', 'Camping'],
        'max_participants': 2,
    },
    {
        'creator': 'ana.silva@travelbuddy.app',
        'title': 'Lisbon Weekend',
        'destination': 'Lisbon, Portugal',
        'start_date': date(2027, 1, 15),
        'end_date': date(2027, 1, 18),
        'description': 'Fado nights, pastel de nata and a day trip to Sintra.',
        'activities': ['City walks', 'Fado', 'Day trip'],
        'max_participants': 3,
    },
]

# (sender, trip title, message, resolution or None for pending)
DEMO_REQUESTS = [
    ('lucas.moreau@travelbuddy.app', 'Backpacking Northern Vietnam',
     'I did the Ha Giang loop last year and would love to go again!', JoinRequest.Status.ACCEPTED),
    ('jonas.berg@travelbuddy.app', 'Backpacking Northern Vietnam',
     'Free those dates, happy to share costs.', None),
    ('maya.chen@travelbuddy.app', 'Patagonia W Trek',
     'Hiked Kilimanjaro in March, fit and ready.', None),
    ('jonas.berg@travelbuddy.app', 'Lisbon Weekend',
     'Would be my first time in Portugal.', JoinRequest.Status.REJECTED),
]

# (sender, receiver, content)
DEMO_MESSAGES = [
    ('lucas.moreau@travelbuddy.app', 'maya.chen@travelbuddy.app', 'Thanks for accepting me! Flying in on the 9th.'),
    ('maya.chen@travelbuddy.app', 'lucas.moreau@travelbuddy.app', 'Great, I booked a hostel in the Old Quarter for us.'),
    ('jonas.berg@travelbuddy.app', 'ana.silva@travelbuddy.app', 'No worries about Lisbon, maybe next time.'),
]


class Command(BaseCommand):
    help = 'Seed realistic demo data (users, trips, join requests, messages) for TravelBuddy'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Delete all existing demo data before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['reset']:
            self._reset()

        users = self._seed_users()
        trips = self._seed_trips(users)
        self._seed_requests(users, trips)
        self._seed_messages(users)

        self.stdout.write(self.style.SUCCESS('\nDemo data seeded successfully!\n'))
        self.stdout.write(f'Users:    {len(users)}')
        self.stdout.write(f'Trips:    {len(trips)}')
        self.stdout.write('\nDemo login credentials:')
        for data in DEMO_USERS:
            self.stdout.write(f'  {data["email"]} / {DEMO_PASSWORD}')

    # -----------------------------------------------------------------------

    def _reset(self):
        self.stdout.write('Resetting demo data...')
        demo_users = User.objects.filter(email__in=[u['email'] for u in DEMO_USERS])
        Message.objects.filter(sender__in=demo_users).delete()
        JoinRequest.objects.filter(trip__creator__in=demo_users).delete()
        Participation.objects.filter(trip__creator__in=demo_users).delete()
        Trip.objects.filter(creator__in=demo_users).delete()
        demo_users.delete()
        self.stdout.write('  Reset complete.')

    def _seed_users(self):
        self.stdout.write('\nSeeding users...')
        users = {}
        for data in DEMO_USERS:
            email = data['email']
            user, created = User.objects.get_or_create(
                email=email,
                defaults={
                    'username': generate_username(email),
                    'name': data['name'],
                    'nationality': data['nationality'],
                    'languages': data['languages'],
                    'is_staff': data['is_staff'],
                    'is_superuser': data['is_superuser'],
                    'is_active': True,
                },
            )
            user.set_password(DEMO_PASSWORD)
            user.save()
            users[email] = user
            self.stdout.write(f'  {"created" if created else "updated"}: {email}')
        return users

    def _seed_trips(self, users):
        self.stdout.write('\nSeeding trips...')
        trips = {}
        for data in DEMO_TRIPS:
            attrs = {key: value for key, value in data.items() if key != 'creator'}
            creator = users[data['creator']]
            trip = Trip.objects.filter(creator=creator, title=data['title']).first()
            if trip is None:
                trip = registry.create_trip(creator, attrs)
                self.stdout.write(f'  created trip: {trip.title}')
            else:
                self.stdout.write(f'  exists: {trip.title}')
            trips[trip.title] = trip
        return trips

    def _seed_requests(self, users, trips):
        self.stdout.write('\nSeeding join requests...')
        for sender_email, title, message, resolution in DEMO_REQUESTS:
            sender = users[sender_email]
            trip = trips[title]
            if JoinRequest.objects.filter(trip=trip, sender=sender).exists():
                self.stdout.write(f'  exists: {sender.name} -> {title}')
                continue
            join_request = workflow.request_to_join(trip.pk, sender, message)
            if resolution is not None:
                workflow.resolve_request(join_request.pk, trip.creator, resolution)
            self.stdout.write(f'  {join_request.status if resolution is None else resolution}: {sender.name} -> {title}')

    def _seed_messages(self, users):
        self.stdout.write('\nSeeding messages...')
        for sender_email, receiver_email, content in DEMO_MESSAGES:
            sender = users[sender_email]
            receiver = users[receiver_email]
            if Message.objects.filter(sender=sender, receiver=receiver, content=content).exists():
                continue
            conversations.send_message(sender, receiver.pk, content)
            self.stdout.write(f'  {sender.name} -> {receiver.name}')
