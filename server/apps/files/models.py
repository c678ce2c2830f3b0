"""Database models for files app."""

import uuid
from pathlib import Path
from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

from server.apps.files.infrastructure.metadata import get_file_extension

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_MIME_TYPE_MAX_LENGTH: Final = 255
_STORAGE_KEY_MAX_LENGTH: Final = 1024
_FOLDER_MAX_LENGTH: Final = 1024
_TAG_NAME_MAX_LENGTH: Final = 100
_TAG_COLOR_MAX_LENGTH: Final = 7  # Hex color: #RRGGBB
_VISIBILITY_MAX_LENGTH: Final = 32


class Visibility(models.TextChoices):
    """How a file shows up in listings."""

    VISIBLE = 'visible', 'Visible'
    HIDDEN_FROM_TRASH = 'hidden_from_trash', 'Hidden from trash'


class ActiveFileManager(models.Manager['File']):
    """Default manager returning only files that are not in trash."""

    @override
    def get_queryset(self) -> models.QuerySet['File']:
        """Exclude soft-deleted files."""
        return super().get_queryset().filter(is_deleted=False)


@final
class File(models.Model):
    """File stored in S3-compatible storage.

    Each file belongs to a user and has a storage key following
    the pattern: {owner_id}/{image|video|files}/{name}

    The storage key is derived once at upload and never changes;
    soft delete and restore only touch metadata.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Owner relationship
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Resolved storage-facing name',
    )

    original_name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Filename as sent by the client',
    )

    size = models.BigIntegerField(
        help_text='File size in bytes',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
    )

    storage_key = models.CharField(
        max_length=_STORAGE_KEY_MAX_LENGTH,
        unique=True,
        help_text='Path in storage: {owner_id}/{category}/{name}',
    )

    preview_key = models.CharField(
        max_length=_STORAGE_KEY_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Path of the JPEG thumbnail, empty when none',
    )

    folder = models.CharField(
        max_length=_FOLDER_MAX_LENGTH,
        null=True,
        blank=True,
    )

    visibility = models.CharField(
        max_length=_VISIBILITY_MAX_LENGTH,
        choices=Visibility.choices,
        default=Visibility.VISIBLE,
    )

    # Soft delete
    is_deleted = models.BooleanField(default=False, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ActiveFileManager()
    all_objects = models.Manager()

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']
        base_manager_name = 'all_objects'

        indexes: ClassVar[list[models.Index]] = [
            # Listing and trash queries
            models.Index(
                fields=['owner', 'is_deleted', '-created_at'],
                name='files_owner_recent_idx',
            ),
            # Trash sweep
            models.Index(
                fields=['is_deleted', 'deleted_at'],
                name='files_trash_age_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner_id}:{self.storage_key}'

    def get_category(self) -> str:
        """Extract category from storage key.

        Example: '42/image/cat.png' -> 'image'

        Returns:
            Category path component.
        """
        return Path(self.storage_key).parent.name

    def get_extension(self) -> str:
        """Extract file extension.

        Example: 'report.PDF' -> 'pdf'

        Returns:
            Extension without dot (lowercase).
        """
        return get_file_extension(self.name)

    def get_tags(self) -> list[str]:
        """Return free-text tags attached to this file."""
        return [file_tag.name for file_tag in self.file_tags.all()]

    @property
    def has_preview(self) -> bool:
        """Whether a thumbnail was stored for this file."""
        return bool(self.preview_key)


@final
class FileTag(models.Model):
    """Free-text tag attached to a file.

    Plain strings, never validated against the user's ``Tag`` palette.
    """

    file = models.ForeignKey(
        File,
        on_delete=models.CASCADE,
        related_name='file_tags',
    )

    name = models.CharField(max_length=_TAG_NAME_MAX_LENGTH)

    class Meta:
        """Model metadata."""

        verbose_name = 'File tag'  # type: ignore[mutable-override]
        verbose_name_plural = 'File tags'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=['file', 'name'],
                name='file_tags_file_name_unique',
            ),
        ]

        indexes: ClassVar[list[models.Index]] = [
            models.Index(fields=['name'], name='file_tags_name_idx'),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.file_id}:{self.name}'


@final
class Tag(models.Model):
    """User-defined tag for organizing files.

    Tags are scoped to individual users to prevent naming conflicts
    and maintain user isolation.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tags',
        db_index=True,
    )

    name = models.CharField(
        max_length=_TAG_NAME_MAX_LENGTH,
    )

    color = models.CharField(
        max_length=_TAG_COLOR_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Hex color code for UI display (e.g., #FF5733)',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Tag'  # type: ignore[mutable-override]
        verbose_name_plural = 'Tags'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['name']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # Ensure tag names are unique per user
            models.UniqueConstraint(
                fields=['user', 'name'],
                name='tags_user_name_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user_id}:{self.name}'
