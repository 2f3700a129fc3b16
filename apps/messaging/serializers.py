"""
Serializers for the Messaging app.
All output uses camelCase to match the web client.
"""
from rest_framework import serializers

from apps.messaging.models import Message
from apps.users.serializers import UserSummarySerializer


class MessageSerializer(serializers.ModelSerializer):
    senderId = serializers.UUIDField(source='sender_id', read_only=True)
    receiverId = serializers.UUIDField(source='receiver_id', read_only=True)
    isRead = serializers.BooleanField(source='is_read', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Message
        fields = ['id', 'senderId', 'receiverId', 'content', 'isRead', 'createdAt']
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    receiverId = serializers.UUIDField()
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ConversationSerializer(serializers.Serializer):
    """One entry of the inbox: counterpart, latest message and unread count."""
    contact = UserSummarySerializer()
    lastMessage = MessageSerializer(source='last_message')
    unreadCount = serializers.IntegerField(source='unread_count')
