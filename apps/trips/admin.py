"""
Admin configuration for the Trips app.
"""
from django.contrib import admin

from apps.trips.models import Participation, Trip


class ParticipationInline(admin.TabularInline):
    model = Participation
    extra = 0
    ordering = ['created_at']
    raw_id_fields = ['user']


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = [
        'title', 'destination', 'status', 'start_date', 'end_date',
        'max_participants', 'creator', 'created_at',
    ]
    list_filter = ['status', 'start_date', 'created_at']
    search_fields = ['title', 'destination', 'description', 'creator__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ParticipationInline]


@admin.register(Participation)
class ParticipationAdmin(admin.ModelAdmin):
    list_display = ['user', 'trip', 'created_at']
    search_fields = ['user__email', 'trip__title']
    ordering = ['-created_at']
