"""
Models for the Messaging app.
"""
from django.conf import settings
from django.db import models

from common.models import TimestampedModel


class Message(TimestampedModel):
    """
    A direct message between two users. Only ``is_read`` ever changes.
    """
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sent_messages',
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='received_messages',
    )
    content = models.TextField()
    is_read = models.BooleanField(default=False, db_index=True)

    class Meta:
        db_table = 'messages'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['sender', 'receiver', 'created_at'], name='messages_pair_created_idx'),
        ]

    def __str__(self):
        return f'{self.sender} -> {self.receiver}: {self.content[:50]}'
