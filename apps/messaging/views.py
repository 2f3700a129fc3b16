"""
Views for the Messaging app.

Clients poll these endpoints: an open conversation every few seconds with
``?since=<last message id>``, the unread badge about once a minute.
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.messaging.serializers import (
    ConversationSerializer,
    MessageCreateSerializer,
    MessageSerializer,
)
from apps.messaging.services import conversations
from apps.users.serializers import UserSummarySerializer
from common.responses import success_response

logger = logging.getLogger(__name__)


class ConversationListView(APIView):
    """
    List the caller's conversations or send a message.

    GET  /api/v1/messages/
    POST /api/v1/messages/
    Body: {"receiverId": "...", "content": "..."}
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        inbox = conversations.list_conversations(request.user)
        return success_response(ConversationSerializer(inbox, many=True).data)

    def post(self, request):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = conversations.send_message(
            request.user,
            serializer.validated_data['receiverId'],
            serializer.validated_data['content'],
        )
        return success_response(
            MessageSerializer(message).data,
            http_status=status.HTTP_201_CREATED,
        )


class ConversationDetailView(APIView):
    """
    The thread with one user. Marks their messages to the caller as read.

    GET /api/v1/messages/{user_id}/?since=<message_id>
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, user_pk=None):
        other, messages = conversations.get_conversation(
            request.user,
            user_pk,
            since_message_id=request.query_params.get('since'),
        )
        return success_response({
            'otherUser': UserSummarySerializer(other).data,
            'messages': MessageSerializer(messages, many=True).data,
        })


class MarkReadView(APIView):
    """
    POST /api/v1/messages/{user_id}/read/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, user_pk=None):
        updated = conversations.mark_conversation_read(request.user, user_pk)
        return success_response({'updated': updated})


class UnreadCountView(APIView):
    """
    GET /api/v1/messages/unread-count/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return success_response({'count': conversations.unread_count(request.user)})
