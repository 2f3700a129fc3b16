"""
URL configuration for the Trips app.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from apps.trips.views import TripViewSet

app_name = 'trips'

router = DefaultRouter()
router.register(r'trips', TripViewSet, basename='trip')

urlpatterns = [
    path('', include(router.urls)),
]
