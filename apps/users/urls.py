"""
URL configuration for the Users app.
"""
from django.urls import path

from apps.users.views import (
    ChangePasswordView,
    CustomTokenRefreshView,
    LoginView,
    LogoutView,
    PublicProfileView,
    RegisterView,
    UserProfileView,
    UserTripsView,
)

app_name = 'users'

urlpatterns = [
    # Authentication
    path('auth/register/', RegisterView.as_view(), name='register'),
    path('auth/login/', LoginView.as_view(), name='login'),
    path('auth/token/refresh/', CustomTokenRefreshView.as_view(), name='token-refresh'),
    path('auth/logout/', LogoutView.as_view(), name='logout'),

    # User profile
    path('users/profile/', UserProfileView.as_view(), name='user-profile'),
    path('users/trips/', UserTripsView.as_view(), name='user-trips'),
    path('users/change-password/', ChangePasswordView.as_view(), name='change-password'),
    path('users/<uuid:pk>/', PublicProfileView.as_view(), name='public-profile'),
]
