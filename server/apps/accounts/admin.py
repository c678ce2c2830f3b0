"""Django admin configuration for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from server.apps.accounts.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for User model."""

    ordering = ['-created_at']

    list_display = [
        'email',
        'name',
        'email_verified',
        'is_google_linked',
        'is_staff',
        'created_at',
    ]

    list_filter = [
        'email_verified',
        'is_staff',
        'is_active',
    ]

    search_fields = [
        'email',
        'name',
        'google_email',
    ]

    readonly_fields = [
        'google_id',
        'google_email',
        'created_at',
        'updated_at',
        'last_login',
    ]

    fieldsets = (
        (None, {
            'fields': ('email', 'password'),
        }),
        ('Profile', {
            'fields': ('name', 'avatar', 'email_verified'),
        }),
        ('Google', {
            'fields': ('google_id', 'google_email'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
        ('Timestamps', {
            'fields': ('last_login', 'created_at', 'updated_at'),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2'),
        }),
    )

    @admin.display(boolean=True, description='Google')
    def is_google_linked(self, obj: User) -> bool:
        """Whether the account signs in through Google."""
        return bool(obj.google_id)
