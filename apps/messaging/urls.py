"""
URL configuration for the Messaging app.
"""
from django.urls import path

from apps.messaging.views import (
    ConversationDetailView,
    ConversationListView,
    MarkReadView,
    UnreadCountView,
)

app_name = 'messaging'

urlpatterns = [
    path('messages/', ConversationListView.as_view(), name='conversation-list'),
    path('messages/unread-count/', UnreadCountView.as_view(), name='unread-count'),
    path('messages/<uuid:user_pk>/', ConversationDetailView.as_view(), name='conversation-detail'),
    path('messages/<uuid:user_pk>/read/', MarkReadView.as_view(), name='conversation-read'),
]
