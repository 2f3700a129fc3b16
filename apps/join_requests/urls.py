"""
URL configuration for the Join Requests app.
"""
from django.urls import path

from apps.join_requests.views import (
    JoinRequestDetailView,
    PendingCountView,
    RequestsOverviewView,
    TripJoinCountView,
    TripJoinView,
    TripRequestsView,
)

app_name = 'join_requests'

urlpatterns = [
    path('trips/<uuid:trip_pk>/join/', TripJoinView.as_view(), name='trip-join'),
    path('trips/<uuid:trip_pk>/join/count/', TripJoinCountView.as_view(), name='trip-join-count'),
    path('trips/<uuid:trip_pk>/requests/', TripRequestsView.as_view(), name='trip-requests'),
    path('join-requests/<uuid:pk>/', JoinRequestDetailView.as_view(), name='join-request-detail'),
    path('requests/', RequestsOverviewView.as_view(), name='requests-overview'),
    path('requests/pending-count/', PendingCountView.as_view(), name='requests-pending-count'),
]
