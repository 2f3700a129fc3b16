"""
Direct messaging between two users.

Messages are append-only. The only state change is ``is_read``, flipped when
the receiver opens the conversation. New messages are discovered by client
polling, using the ``since`` cursor of :func:`get_conversation`.
"""
import logging
import uuid

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Q

from apps.messaging.models import Message
from common.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)
User = get_user_model()


def _get_user_or_404(user_id, message='User not found.'):
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, DjangoValidationError, ValueError):
        raise NotFoundError(message)


def _between(user, other):
    return Message.objects.filter(
        Q(sender=user, receiver=other) | Q(sender=other, receiver=user),
    )


def send_message(sender, receiver_id, content):
    """
    Append a message from *sender* to the user *receiver_id*.

    Raises:
        ValidationError: *receiver_id* missing or *content* blank.
        NotFoundError: the receiver does not exist.
    """
    if not receiver_id:
        raise ValidationError('Receiver ID and content are required.')
    if content is None or not str(content).strip():
        raise ValidationError('Message content cannot be empty.')

    receiver = _get_user_or_404(receiver_id, 'Receiver not found.')
    message = Message.objects.create(
        sender=sender,
        receiver=receiver,
        content=str(content),
        is_read=False,
    )
    logger.debug('Message %s sent from %s to %s', message.pk, sender.pk, receiver.pk)
    return message


def get_conversation(user, other_user_id, since_message_id=None):
    """
    Mark the other user's messages to *user* read, then return
    ``(other_user, messages)`` for the thread between them, oldest first.

    With *since_message_id*, only messages created strictly after that
    message are returned. An unknown id returns the whole thread.
    """
    other = _get_user_or_404(other_user_id)
    # Mark first so the returned thread already reflects the read state
    mark_conversation_read(user, other.pk)
    messages = _between(user, other).select_related('sender', 'receiver')

    if since_message_id:
        try:
            since_uuid = uuid.UUID(str(since_message_id))
        except ValueError:
            raise ValidationError('"since" must be a message id.')
        reference = Message.objects.filter(pk=since_uuid).values_list('created_at', flat=True).first()
        if reference is not None:
            messages = messages.filter(created_at__gt=reference)

    return other, list(messages.order_by('created_at'))


def mark_conversation_read(user, other_user_id):
    """
    Mark every unread message from *other_user_id* to *user* as read.
    Returns the number of messages updated.
    """
    updated = Message.objects.filter(
        sender_id=other_user_id,
        receiver=user,
        is_read=False,
    ).update(is_read=True)
    if updated:
        logger.debug('%s message(s) from %s marked read by %s', updated, other_user_id, user.pk)
    return updated


def list_conversations(user):
    """
    One entry per counterpart *user* has exchanged messages with, holding
    ``contact``, ``last_message`` and ``unread_count``. Most recent
    conversation first.
    """
    sent_to = Message.objects.filter(sender=user).values_list('receiver_id', flat=True).distinct()
    received_from = Message.objects.filter(receiver=user).values_list('sender_id', flat=True).distinct()
    contact_ids = set(sent_to) | set(received_from)

    conversations = []
    for contact in User.objects.filter(pk__in=contact_ids):
        last_message = _between(user, contact).order_by('-created_at').first()
        if last_message is None:
            continue
        conversations.append({
            'contact': contact,
            'last_message': last_message,
            'unread_count': Message.objects.filter(
                sender=contact,
                receiver=user,
                is_read=False,
            ).count(),
        })

    conversations.sort(key=lambda conv: conv['last_message'].created_at, reverse=True)
    return conversations


def unread_count(user):
    return Message.objects.filter(receiver=user, is_read=False).count()
