"""Django admin configuration for shares app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils import timezone

from server.apps.shares.models import Share


@admin.register(Share)
class ShareAdmin(admin.ModelAdmin):
    """Admin interface for Share model."""

    list_display = [
        'file',
        'created_by',
        'is_active',
        'is_usable',
        'expires_at',
        'created_at',
    ]

    list_filter = [
        'is_active',
        'expires_at',
    ]

    search_fields = [
        'token',
        'created_by__email',
        'file__original_name',
    ]

    readonly_fields = [
        'token',
        'file',
        'created_by',
        'created_at',
    ]

    def is_usable(self, obj: Share) -> bool:
        """Whether the public link currently resolves.

        Args:
            obj: Share instance.

        Returns:
            True if active, unexpired and the file is not in trash.
        """
        return (
            obj.is_active
            and obj.expires_at > timezone.now()
            and not obj.file.is_deleted
        )
    is_usable.boolean = True  # type: ignore[attr-defined]
    is_usable.short_description = 'Usable'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Share]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('file', 'created_by')
