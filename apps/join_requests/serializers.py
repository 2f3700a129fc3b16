"""
Serializers for the Join Requests app.
All output uses camelCase to match the web client.
"""
from rest_framework import serializers

from apps.join_requests.models import JoinRequest
from apps.users.serializers import SenderSummarySerializer, UserSummarySerializer


class JoinRequestSerializer(serializers.ModelSerializer):
    """A request as seen by the trip creator."""
    tripId = serializers.UUIDField(source='trip_id', read_only=True)
    senderId = serializers.UUIDField(source='sender_id', read_only=True)
    receiverId = serializers.UUIDField(source='receiver_id', read_only=True)
    sender = SenderSummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = JoinRequest
        fields = [
            'id', 'tripId', 'senderId', 'receiverId', 'sender',
            'message', 'status', 'createdAt', 'updatedAt',
        ]
        read_only_fields = fields


class _TripOverviewSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    destination = serializers.CharField()
    startDate = serializers.DateField(source='start_date')
    endDate = serializers.DateField(source='end_date')


class ReceivedRequestSerializer(JoinRequestSerializer):
    """A request in the creator's inbox, with the trip it targets."""
    sender = UserSummarySerializer(read_only=True)
    trip = _TripOverviewSerializer(read_only=True)

    class Meta(JoinRequestSerializer.Meta):
        fields = JoinRequestSerializer.Meta.fields + ['trip']
        read_only_fields = fields


class SentRequestSerializer(serializers.ModelSerializer):
    """A pending request from the sender's side, flattened to trip fields."""
    tripId = serializers.UUIDField(source='trip.id', read_only=True)
    title = serializers.CharField(source='trip.title', read_only=True)
    destination = serializers.CharField(source='trip.destination', read_only=True)
    startDate = serializers.DateField(source='trip.start_date', read_only=True)
    endDate = serializers.DateField(source='trip.end_date', read_only=True)
    creator = UserSummarySerializer(source='trip.creator', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = JoinRequest
        fields = [
            'id', 'tripId', 'title', 'destination', 'startDate', 'endDate',
            'creator', 'status', 'createdAt',
        ]
        read_only_fields = fields


class CreatedTripRequestsSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    destination = serializers.CharField()
    pendingRequestsCount = serializers.IntegerField(source='pending_requests_count')


class JoinRequestCreateSerializer(serializers.Serializer):
    # Blank is checked by the workflow so it reports a single message
    message = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class ResolveRequestSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[JoinRequest.Status.ACCEPTED, JoinRequest.Status.REJECTED],
    )
