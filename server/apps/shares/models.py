"""Database models for shares app."""

import uuid
from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

_TOKEN_MAX_LENGTH: Final = 64


@final
class Share(models.Model):
    """Public, expiring link to a single file.

    A share is usable while it is active, not expired and its file is
    not in trash. Rows are never deleted by the service, only
    deactivated.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    token = models.CharField(
        max_length=_TOKEN_MAX_LENGTH,
        unique=True,
        help_text='Unguessable URL-safe token',
    )

    expires_at = models.DateTimeField()
    is_active = models.BooleanField(default=True)

    file = models.ForeignKey(
        'files.File',
        on_delete=models.CASCADE,
        related_name='shares',
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='shares',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Share'  # type: ignore[mutable-override]
        verbose_name_plural = 'Shares'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

        indexes: ClassVar[list[models.Index]] = [
            # Expiry sweep
            models.Index(
                fields=['is_active', 'expires_at'],
                name='shares_active_expiry_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.file_id}:{self.token[:8]}'
