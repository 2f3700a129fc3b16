"""
Views for the Users app.

All auth responses use camelCase and a flat token structure.
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.join_requests.serializers import SentRequestSerializer
from apps.join_requests.services import workflow
from apps.trips.serializers import JoinedTripSerializer, UserTripSerializer
from apps.trips.services import registry
from apps.users.serializers import (
    ChangePasswordSerializer,
    LoginSerializer,
    PublicProfileSerializer,
    UserRegistrationSerializer,
    UserSerializer,
    UserUpdateSerializer,
)
from common.exceptions import AuthenticationError, NotFoundError, ValidationError
from common.responses import success_response

logger = logging.getLogger(__name__)
User = get_user_model()


def _build_auth_response(user, refresh_token, http_status=status.HTTP_200_OK):
    """Helper to build a consistent auth response with camelCase tokens."""
    return Response(
        {
            'success': True,
            'user': UserSerializer(user).data,
            'accessToken': str(refresh_token.access_token),
            'refreshToken': str(refresh_token),
        },
        status=http_status,
    )


class RegisterView(APIView):
    """
    Register a new user account.

    POST /api/v1/auth/register/
    Body: {"name": "...", "email": "...", "password": "...",
           "dateOfBirth": "...", "nationality": "...", "languages": [...]}
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        refresh = RefreshToken.for_user(user)
        return _build_auth_response(user, refresh, status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    Login with email and password to obtain JWT tokens.

    POST /api/v1/auth/login/
    Body: {"email": "...", "password": "..."}
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']
        password = serializer.validated_data['password']

        user = User.objects.filter(email__iexact=email).first()
        if user is None or not user.check_password(password):
            raise AuthenticationError('Invalid email or password.')

        if not user.is_active:
            return Response(
                {
                    'success': False,
                    'error': {
                        'code': 'account_disabled',
                        'message': 'This account has been disabled.',
                    },
                },
                status=status.HTTP_403_FORBIDDEN,
            )

        refresh = RefreshToken.for_user(user)
        return _build_auth_response(user, refresh, status.HTTP_200_OK)


class CustomTokenRefreshView(APIView):
    """
    Refresh JWT tokens using camelCase field names.

    POST /api/v1/auth/token/refresh/
    Body: {"refreshToken": "..."}
    Response: {"accessToken": "...", "refreshToken": "..."}
    """
    permission_classes = [AllowAny]

    def post(self, request):
        refresh_token_str = request.data.get('refreshToken') or request.data.get('refresh')
        if not refresh_token_str:
            raise ValidationError('refreshToken is required.')

        try:
            old_refresh = RefreshToken(refresh_token_str)
            user = User.objects.get(id=old_refresh.payload.get('user_id'))
        except TokenError:
            raise AuthenticationError('Token is invalid or expired.')
        except User.DoesNotExist:
            raise AuthenticationError('User not found.')

        if settings.SIMPLE_JWT.get('ROTATE_REFRESH_TOKENS', False):
            old_refresh.blacklist()
            new_refresh = RefreshToken.for_user(user)
            return _build_auth_response(user, new_refresh)

        return Response(
            {
                'success': True,
                'user': UserSerializer(user).data,
                'accessToken': str(old_refresh.access_token),
                'refreshToken': str(old_refresh),
            },
            status=status.HTTP_200_OK,
        )


class LogoutView(APIView):
    """
    Logout by blacklisting the refresh token.

    POST /api/v1/auth/logout/
    Body: {"refreshToken": "<refresh_token>"}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        # Accept both camelCase and snake_case
        refresh_token = (
            request.data.get('refreshToken')
            or request.data.get('refresh')
        )
        if not refresh_token:
            raise ValidationError('Refresh token is required.')

        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError as exc:
            logger.info('Logout with unusable refresh token for %s: %s', request.user.pk, exc)
            raise ValidationError('Token is invalid or expired.')

        return success_response(message='Successfully logged out.')


class UserProfileView(APIView):
    """
    Retrieve or update the authenticated user's profile.

    GET   /api/v1/users/profile/
    PUT   /api/v1/users/profile/
    PATCH /api/v1/users/profile/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return success_response(UserSerializer(request.user).data)

    def put(self, request):
        return self._update(request, partial=False)

    def patch(self, request):
        return self._update(request, partial=True)

    def _update(self, request, partial):
        serializer = UserUpdateSerializer(
            request.user,
            data=request.data,
            partial=partial,
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response(UserSerializer(request.user).data)


class PublicProfileView(APIView):
    """
    Public profile of any user.

    GET /api/v1/users/{id}/
    """
    permission_classes = [AllowAny]

    def get(self, request, pk=None):
        try:
            user = User.objects.get(pk=pk)
        except User.DoesNotExist:
            raise NotFoundError('User not found.')
        return success_response(PublicProfileSerializer(user).data)


class UserTripsView(APIView):
    """
    The caller's trips: created, joined and still-pending requests.

    GET /api/v1/users/trips/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        created, joined = registry.trips_for_user(request.user)
        pending = workflow.pending_requests_sent(request.user)
        return success_response({
            'created': UserTripSerializer(created, many=True).data,
            'joined': JoinedTripSerializer(joined, many=True).data,
            'pendingRequests': SentRequestSerializer(pending, many=True).data,
        })


class ChangePasswordView(APIView):
    """
    Change the authenticated user's password.

    POST /api/v1/users/change-password/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ChangePasswordSerializer(
            data=request.data,
            context={'request': request},
        )
        serializer.is_valid(raise_exception=True)

        request.user.set_password(serializer.validated_data['newPassword'])
        request.user.save()

        return success_response(message='Password changed successfully.')
