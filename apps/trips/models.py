"""
Models for the Trips app.
"""
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from common.models import TimestampedModel


class Trip(TimestampedModel):
    """
    A trip listing that other travellers can ask to join.
    """
    class Status(models.TextChoices):
        OPEN = 'OPEN', 'Open'
        FULL = 'FULL', 'Full'
        COMPLETED = 'COMPLETED', 'Completed'
        CANCELLED = 'CANCELLED', 'Cancelled'

    title = models.CharField(max_length=200)
    destination = models.CharField(max_length=255, db_index=True)
    start_date = models.DateField()
    end_date = models.DateField()
    description = models.TextField()
    activities = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True, default='')
    max_participants = models.PositiveIntegerField(
        default=2,
        validators=[MinValueValidator(1)],
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.OPEN,
        db_index=True,
    )
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='created_trips',
    )

    class Meta:
        db_table = 'trips'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.title} ({self.destination})'

    @property
    def participant_count(self):
        return len(self.participants.all())

    @property
    def is_full(self):
        # Status is not kept in sync with the roster, so count it.
        return self.participant_count >= self.max_participants

    def clean(self):
        from django.core.exceptions import ValidationError
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError({'end_date': 'End date must be after start date.'})


class Participation(TimestampedModel):
    """
    Roster entry linking a confirmed participant to a trip.
    """
    trip = models.ForeignKey(
        Trip,
        on_delete=models.CASCADE,
        related_name='participants',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='participations',
    )

    class Meta:
        db_table = 'trip_participants'
        unique_together = ['trip', 'user']
        ordering = ['created_at']

    def __str__(self):
        return f'{self.user} on {self.trip}'
