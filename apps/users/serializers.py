"""
Serializers for the Users app.

All serializers use camelCase field names to match the web client.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import IntegrityError, transaction
from rest_framework import serializers

from apps.users.utils import generate_username

User = get_user_model()

DUPLICATE_EMAIL_MESSAGE = 'A user with this email already exists.'


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user projection embedded in trips, requests and messages."""
    profileImage = serializers.CharField(source='profile_image', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'profileImage']
        read_only_fields = fields


class SenderSummarySerializer(UserSummarySerializer):
    """User projection shown to a trip creator reviewing join requests."""

    class Meta(UserSummarySerializer.Meta):
        fields = ['id', 'name', 'profileImage', 'nationality', 'languages']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """
    Read-only serializer for the authenticated user's own profile.
    Never exposes the password hash.
    """
    dateOfBirth = serializers.DateField(source='date_of_birth', read_only=True)
    profileImage = serializers.CharField(source='profile_image', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'dateOfBirth',
            'nationality',
            'bio',
            'languages',
            'profileImage',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields


class PublicProfileSerializer(serializers.ModelSerializer):
    """
    Public view of another traveller, with their three most recent open trips.
    """
    profileImage = serializers.CharField(source='profile_image', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    createdTrips = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'nationality',
            'bio',
            'languages',
            'profileImage',
            'createdAt',
            'createdTrips',
        ]
        read_only_fields = fields

    def get_createdTrips(self, obj):
        from apps.trips.models import Trip
        from apps.trips.serializers import TripBriefSerializer

        trips = obj.created_trips.filter(status=Trip.Status.OPEN).order_by('-created_at')[:3]
        return TripBriefSerializer(trips, many=True).data


class UserRegistrationSerializer(serializers.Serializer):
    """
    Serializer for user registration.
    Accepts camelCase, auto-generates username from email.
    """
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'},
    )
    dateOfBirth = serializers.DateField(required=False, allow_null=True)
    nationality = serializers.CharField(max_length=100, required=False, allow_blank=True)
    languages = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
    )

    def validate_email(self, value):
        value = value.lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError(DUPLICATE_EMAIL_MESSAGE)
        return value

    def create(self, validated_data):
        email = validated_data['email']
        user = User(
            email=email,
            username=generate_username(email),
            name=validated_data['name'],
            date_of_birth=validated_data.get('dateOfBirth'),
            nationality=validated_data.get('nationality', ''),
            languages=validated_data.get('languages', []),
        )
        user.set_password(validated_data['password'])
        try:
            with transaction.atomic():
                user.save()
        except IntegrityError:
            # A concurrent registration took the email after validate_email ran
            if User.objects.filter(email__iexact=email).exists():
                raise serializers.ValidationError({'email': [DUPLICATE_EMAIL_MESSAGE]})
            raise
        return user


class UserUpdateSerializer(serializers.Serializer):
    """
    Serializer for updating the user profile.
    ``name`` is required on PUT; PATCH updates only the fields sent.
    """
    name = serializers.CharField(max_length=150)
    dateOfBirth = serializers.DateField(required=False, allow_null=True)
    nationality = serializers.CharField(max_length=100, required=False, allow_blank=True)
    bio = serializers.CharField(required=False, allow_blank=True)
    languages = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
    )
    profileImage = serializers.URLField(max_length=500, required=False, allow_blank=True)

    field_map = {
        'name': 'name',
        'dateOfBirth': 'date_of_birth',
        'nationality': 'nationality',
        'bio': 'bio',
        'languages': 'languages',
        'profileImage': 'profile_image',
    }

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Name is required.')
        return value.strip()

    def update(self, instance, validated_data):
        for key, attr in self.field_map.items():
            if key in validated_data:
                setattr(instance, attr, validated_data[key])
        instance.save()
        return instance


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(style={'input_type': 'password'})


class ChangePasswordSerializer(serializers.Serializer):
    """
    Serializer for password change.
    """
    oldPassword = serializers.CharField(required=True)
    newPassword = serializers.CharField(
        required=True,
        validators=[validate_password],
    )

    def validate_oldPassword(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError('Old password is incorrect.')
        return value
