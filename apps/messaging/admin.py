"""
Admin configuration for the Messaging app.
"""
from django.contrib import admin

from apps.messaging.models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['sender', 'receiver', 'short_content', 'is_read', 'created_at']
    list_filter = ['is_read', 'created_at']
    search_fields = ['sender__email', 'receiver__email', 'content']
    readonly_fields = ['created_at', 'updated_at']

    @admin.display(description='Content')
    def short_content(self, obj):
        return obj.content[:60]
