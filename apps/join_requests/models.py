"""
Models for the Join Requests app.
"""
from django.conf import settings
from django.db import models

from common.models import TimestampedModel


class JoinRequest(TimestampedModel):
    """
    A traveller's application to join someone else's trip.

    PENDING moves to ACCEPTED or REJECTED exactly once; both are terminal.
    """
    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        ACCEPTED = 'ACCEPTED', 'Accepted'
        REJECTED = 'REJECTED', 'Rejected'

    trip = models.ForeignKey(
        'trips.Trip',
        on_delete=models.CASCADE,
        related_name='join_requests',
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sent_join_requests',
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='received_join_requests',
        help_text='Creator of the trip when the request was sent.',
    )
    message = models.TextField()
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    class Meta:
        db_table = 'join_requests'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['trip', 'sender'],
                condition=models.Q(status='PENDING'),
                name='uq_pending_join_request',
            ),
        ]

    def __str__(self):
        return f'{self.sender} -> {self.trip} ({self.status})'

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING
