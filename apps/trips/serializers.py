"""
Serializers for the Trips app.
All output uses camelCase to match the web client.
"""
from rest_framework import serializers

from apps.trips.models import Participation, Trip
from apps.users.serializers import UserSummarySerializer


class TripBriefSerializer(serializers.ModelSerializer):
    startDate = serializers.DateField(source='start_date', read_only=True)
    endDate = serializers.DateField(source='end_date', read_only=True)

    class Meta:
        model = Trip
        fields = ['id', 'title', 'destination', 'startDate', 'endDate']
        read_only_fields = fields


class TripSerializer(serializers.ModelSerializer):
    """Listing projection: trip fields, creator summary and roster."""
    startDate = serializers.DateField(source='start_date', read_only=True)
    endDate = serializers.DateField(source='end_date', read_only=True)
    imageUrl = serializers.CharField(source='image_url', read_only=True)
    maxParticipants = serializers.IntegerField(source='max_participants', read_only=True)
    creator = UserSummarySerializer(read_only=True)
    participants = serializers.SerializerMethodField()
    participantCount = serializers.ReadOnlyField(source='participant_count')
    isFull = serializers.ReadOnlyField(source='is_full')
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Trip
        fields = [
            'id', 'title', 'destination', 'startDate', 'endDate',
            'description', 'activities', 'imageUrl', 'maxParticipants',
            'status', 'creator', 'participants', 'participantCount',
            'isFull', 'createdAt', 'updatedAt',
        ]
        read_only_fields = fields

    def get_participants(self, obj):
        users = [p.user for p in obj.participants.all()]
        return UserSummarySerializer(users, many=True).data


class TripDetailSerializer(TripSerializer):
    """
    Single-trip projection. Adds the viewer flags passed in
    ``context['flags']`` and, for the creator, the pending join requests.
    """
    joinRequests = serializers.SerializerMethodField()

    class Meta(TripSerializer.Meta):
        fields = TripSerializer.Meta.fields + ['joinRequests']
        read_only_fields = fields

    def get_joinRequests(self, obj):
        if not self.context.get('flags', {}).get('isCreator'):
            return None
        from apps.join_requests.models import JoinRequest
        from apps.join_requests.serializers import JoinRequestSerializer

        pending = obj.join_requests.filter(
            status=JoinRequest.Status.PENDING,
        ).select_related('sender').order_by('-created_at')
        return JoinRequestSerializer(pending, many=True).data

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data.update(self.context.get('flags', {}))
        if data['joinRequests'] is None:
            data.pop('joinRequests')
        return data


class TripWriteSerializer(serializers.Serializer):
    """
    Accepts camelCase, maps to snake_case model fields.
    Used for create (all required fields) and for partial updates.
    """
    title = serializers.CharField(max_length=200)
    destination = serializers.CharField(max_length=255)
    startDate = serializers.DateField()
    endDate = serializers.DateField()
    description = serializers.CharField()
    activities = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
    )
    imageUrl = serializers.URLField(max_length=500, required=False, allow_blank=True)
    maxParticipants = serializers.IntegerField(min_value=1, required=False)
    status = serializers.ChoiceField(choices=Trip.Status.choices, required=False)

    field_map = {
        'title': 'title',
        'destination': 'destination',
        'startDate': 'start_date',
        'endDate': 'end_date',
        'description': 'description',
        'activities': 'activities',
        'imageUrl': 'image_url',
        'maxParticipants': 'max_participants',
        'status': 'status',
    }

    def validate(self, attrs):
        start_date = attrs.get('startDate')
        end_date = attrs.get('endDate')
        if start_date and end_date and end_date <= start_date:
            raise serializers.ValidationError({'endDate': 'End date must be after start date.'})
        return attrs

    def to_model_attrs(self):
        """Validated data keyed by model field name."""
        return {
            self.field_map[key]: value
            for key, value in self.validated_data.items()
        }


class UserTripSerializer(TripSerializer):
    """A trip as listed under the creator's own trips."""
    isCreator = serializers.SerializerMethodField()

    class Meta(TripSerializer.Meta):
        fields = [
            'id', 'title', 'destination', 'startDate', 'endDate',
            'status', 'participantCount', 'maxParticipants', 'participants',
            'creator', 'isCreator', 'imageUrl',
        ]
        read_only_fields = fields

    def get_isCreator(self, obj):
        return True


class JoinedTripSerializer(serializers.ModelSerializer):
    """A roster entry on someone else's trip, flattened to trip fields."""
    id = serializers.UUIDField(source='trip.id', read_only=True)
    title = serializers.CharField(source='trip.title', read_only=True)
    destination = serializers.CharField(source='trip.destination', read_only=True)
    startDate = serializers.DateField(source='trip.start_date', read_only=True)
    endDate = serializers.DateField(source='trip.end_date', read_only=True)
    status = serializers.CharField(source='trip.status', read_only=True)
    participantCount = serializers.ReadOnlyField(source='trip.participant_count')
    maxParticipants = serializers.IntegerField(source='trip.max_participants', read_only=True)
    imageUrl = serializers.CharField(source='trip.image_url', read_only=True)
    creator = UserSummarySerializer(source='trip.creator', read_only=True)
    isCreator = serializers.SerializerMethodField()
    joinedAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Participation
        fields = [
            'id', 'title', 'destination', 'startDate', 'endDate', 'status',
            'participantCount', 'maxParticipants', 'imageUrl', 'creator',
            'isCreator', 'joinedAt',
        ]
        read_only_fields = fields

    def get_isCreator(self, obj):
        return False
