"""
Custom User model for the TravelBuddy application.
"""
import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Extended User model with traveller profile fields.

    Uses email as the primary login identifier instead of username.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        unique=True,
        db_index=True,
        error_messages={
            'unique': 'A user with that email already exists.',
        },
    )
    name = models.CharField(
        max_length=150,
        help_text='Display name shown on trips and messages.',
    )
    date_of_birth = models.DateField(null=True, blank=True)
    nationality = models.CharField(max_length=100, blank=True, default='')
    bio = models.TextField(blank=True, default='')
    languages = models.JSONField(
        default=list,
        blank=True,
        help_text='Ordered list of spoken languages.',
    )
    profile_image = models.URLField(
        max_length=500,
        blank=True,
        default='',
        help_text='URL to the profile image.',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username', 'name']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.name} ({self.email})'
