"""
Admin configuration for the Join Requests app.
"""
from django.contrib import admin

from apps.join_requests.models import JoinRequest


@admin.register(JoinRequest)
class JoinRequestAdmin(admin.ModelAdmin):
    list_display = ['trip', 'sender', 'receiver', 'status', 'created_at', 'updated_at']
    list_filter = ['status', 'created_at']
    search_fields = ['trip__title', 'sender__email', 'receiver__email', 'message']
    readonly_fields = ['created_at', 'updated_at']
