"""
Views for the Trips app.
"""
import logging

from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated

from apps.trips.serializers import (
    TripDetailSerializer,
    TripSerializer,
    TripWriteSerializer,
)
from apps.trips.services import registry
from common.responses import success_response

logger = logging.getLogger(__name__)


class TripViewSet(viewsets.ViewSet):
    """
    ViewSet for Trip CRUD operations.

    list:    GET    /api/v1/trips/?destination=&startDate=&endDate=
    create:  POST   /api/v1/trips/
    read:    GET    /api/v1/trips/{id}/
    update:  PUT    /api/v1/trips/{id}/
    partial: PATCH  /api/v1/trips/{id}/
    delete:  DELETE /api/v1/trips/{id}/
    """
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_permissions(self):
        if self.action in ('list', 'retrieve'):
            return [AllowAny()]
        return [IsAuthenticated()]

    def list(self, request):
        trips = registry.list_trips(request.query_params)
        return success_response(TripSerializer(trips, many=True).data)

    def create(self, request):
        serializer = TripWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        trip = registry.create_trip(request.user, serializer.to_model_attrs())
        trip, flags = registry.get_trip(trip.pk, viewer=request.user)
        return success_response(
            TripDetailSerializer(trip, context={'flags': flags}).data,
            message='Trip created successfully.',
            http_status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        trip, flags = registry.get_trip(pk, viewer=request.user)
        return success_response(TripDetailSerializer(trip, context={'flags': flags}).data)

    def update(self, request, pk=None, partial=True):
        # PUT behaves like PATCH: fields left out keep their value
        serializer = TripWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        trip = registry.update_trip(pk, request.user, serializer.to_model_attrs())
        flags = registry.viewer_flags(trip, request.user)
        return success_response(
            TripDetailSerializer(trip, context={'flags': flags}).data,
            message='Trip updated successfully.',
        )

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        registry.delete_trip(pk, request.user)
        return success_response(message='Trip deleted successfully.')
