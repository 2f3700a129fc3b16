"""
Views for the Join Requests app.
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.join_requests.serializers import (
    CreatedTripRequestsSerializer,
    JoinRequestCreateSerializer,
    JoinRequestSerializer,
    ReceivedRequestSerializer,
    ResolveRequestSerializer,
)
from apps.join_requests.services import workflow
from common.responses import success_response

logger = logging.getLogger(__name__)


class TripJoinView(APIView):
    """
    Request to join a trip, or check where the caller stands.

    POST /api/v1/trips/{trip_id}/join/
    Body: {"message": "..."}

    GET  /api/v1/trips/{trip_id}/join/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, trip_pk=None):
        serializer = JoinRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        join_request = workflow.request_to_join(
            trip_pk,
            request.user,
            serializer.validated_data.get('message'),
        )
        return success_response(
            JoinRequestSerializer(join_request).data,
            message='Join request sent successfully.',
            http_status=status.HTTP_201_CREATED,
        )

    def get(self, request, trip_pk=None):
        return success_response(workflow.join_status(trip_pk, request.user))


class TripJoinCountView(APIView):
    """
    Number of pending requests on a trip. Creator only.

    GET /api/v1/trips/{trip_id}/join/count/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, trip_pk=None):
        count = workflow.pending_count_for_trip(trip_pk, request.user)
        return success_response({'count': count})


class TripRequestsView(APIView):
    """
    All join requests for a trip, newest first. Creator only.

    GET /api/v1/trips/{trip_id}/requests/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, trip_pk=None):
        join_requests = workflow.list_requests_for_trip(trip_pk, request.user)
        return success_response(JoinRequestSerializer(join_requests, many=True).data)


class JoinRequestDetailView(APIView):
    """
    Accept or reject a join request.

    PUT /api/v1/join-requests/{id}/
    Body: {"status": "ACCEPTED" | "REJECTED"}
    """
    permission_classes = [IsAuthenticated]

    def put(self, request, pk=None):
        serializer = ResolveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data['status']
        join_request = workflow.resolve_request(pk, request.user, new_status)
        return success_response(
            JoinRequestSerializer(join_request).data,
            message=f'Join request {new_status.lower()}.',
        )

    patch = put


class RequestsOverviewView(APIView):
    """
    Requests received on the caller's trips.

    GET /api/v1/requests/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        overview = workflow.requests_overview(request.user)
        return success_response({
            'pendingRequests': ReceivedRequestSerializer(overview['pending'], many=True).data,
            'previousRequests': ReceivedRequestSerializer(overview['previous'], many=True).data,
            'createdTrips': CreatedTripRequestsSerializer(overview['created_trips'], many=True).data,
        })


class PendingCountView(APIView):
    """
    Badge count of requests awaiting the caller's decision.

    GET /api/v1/requests/pending-count/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return success_response({'count': workflow.pending_count(request.user)})
