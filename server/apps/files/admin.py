"""Django admin configuration for files app."""


from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.html import format_html

from server.apps.files.models import File, FileTag, Tag


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < 1024:
        return f'{size_bytes} B'
    if size_bytes < 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / 1024:.1f} KB'
    if size_bytes < 1024 * 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / (1024 * 1024):.1f} MB'
    return f'{size_bytes / (1024 * 1024 * 1024):.1f} GB'


class FileTagInline(admin.TabularInline):
    """Free-text tags shown on the file page."""

    model = FileTag
    extra = 0


@admin.register(File)
class FileAdmin(admin.ModelAdmin):
    """Admin interface for File model.

    Lists every file, including those in trash.
    """

    list_display = [
        'original_name',
        'owner',
        'folder',
        'size_display',
        'category_display',
        'extension_display',
        'mime_type',
        'is_deleted',
        'created_at',
    ]

    list_filter = [
        'is_deleted',
        'visibility',
        'mime_type',
        'created_at',
    ]

    search_fields = [
        'original_name',
        'storage_key',
        'owner__email',
    ]

    readonly_fields = [
        'storage_key',
        'preview_key',
        'size',
        'mime_type',
        'deleted_at',
        'created_at',
        'updated_at',
    ]

    inlines = [FileTagInline]

    fieldsets = (
        ('File Information', {
            'fields': ('name', 'original_name', 'owner', 'folder'),
        }),
        ('Storage', {
            'fields': ('storage_key', 'preview_key', 'size', 'mime_type'),
        }),
        ('Trash', {
            'fields': ('is_deleted', 'deleted_at', 'visibility'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.size)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def category_display(self, obj: File) -> str:
        """Storage category read from the key."""
        return obj.get_category()
    category_display.short_description = 'Category'  # type: ignore[attr-defined]

    def extension_display(self, obj: File) -> str:
        """Lowercase extension of the resolved name."""
        return obj.get_extension() or '-'
    extension_display.short_description = 'Extension'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Include trashed files and join owners."""
        return File.all_objects.select_related('owner')


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    """Admin interface for Tag model."""

    list_display = [
        'name',
        'user',
        'color_display',
        'created_at',
    ]

    list_filter = [
        'created_at',
    ]

    search_fields = [
        'name',
        'user__email',
    ]

    fieldsets = (
        ('Tag Information', {
            'fields': ('name', 'user', 'color'),
        }),
        ('Metadata', {
            'fields': ('created_at',),
        }),
    )

    readonly_fields = ['created_at']

    def color_display(self, obj: Tag) -> str:
        """Display color swatch with hex code.

        Args:
            obj: Tag instance.

        Returns:
            HTML formatted color swatch and code.
        """
        if obj.color:
            return format_html(
                '<span style="background-color: {color}; '
                'padding: 2px 10px; border: 1px solid #ccc;">'
                '&nbsp;</span> {color}',
                color=obj.color,
            )
        return '-'
    color_display.short_description = 'Color'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Tag]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user')
