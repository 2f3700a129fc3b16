"""
Admin configuration for the Users app.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from apps.users.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = [
        'email',
        'name',
        'nationality',
        'is_active',
        'is_staff',
        'created_at',
    ]
    list_filter = [
        'is_active',
        'is_staff',
        'nationality',
        'created_at',
    ]
    search_fields = ['email', 'username', 'name', 'nationality']
    ordering = ['-created_at']

    fieldsets = BaseUserAdmin.fieldsets + (
        (
            'Traveller Profile',
            {
                'fields': (
                    'name',
                    'date_of_birth',
                    'nationality',
                    'bio',
                    'languages',
                    'profile_image',
                ),
            },
        ),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        (
            'Profile',
            {
                'fields': (
                    'email',
                    'name',
                    'nationality',
                ),
            },
        ),
    )
