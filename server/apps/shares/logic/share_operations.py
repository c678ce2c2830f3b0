"""Business logic for public share links.

A share moves between three states: active and unexpired (usable),
active but expired, and inactive. Only deactivation and the expiry
sweep change state; inactive is terminal.
"""

import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Final

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db.models import QuerySet
from django.utils import timezone

from server.apps.files.logic.file_operations import get_file, sign_object_url
from server.apps.files.models import File
from server.apps.shares.models import Share
from server.common.exceptions import InvalidArgumentError, NotFoundError

if TYPE_CHECKING:
    from server.apps.accounts.models import User

logger = logging.getLogger(__name__)

_TOKEN_BYTES: Final = 32
_UNUSABLE_SHARE_MESSAGE: Final = 'Share link not found or expired'


@dataclass(frozen=True, slots=True)
class ResolvedShare:
    """Result of resolving a public token."""

    share: Share
    file: File
    download_url: str


def generate_token() -> str:
    """Generate an unguessable URL-safe share token."""
    return secrets.token_urlsafe(_TOKEN_BYTES)


def create_share(
    owner: 'User',
    file_id: uuid.UUID | str,
    expires_at: datetime | None = None,
) -> Share:
    """Create a share link for a live file owned by the caller.

    Args:
        owner: Caller.
        file_id: File to share.
        expires_at: Expiry; defaults to now + SHARE_DEFAULT_EXPIRY_DAYS.

    Returns:
        Created Share with its file loaded.

    Raises:
        NotFoundError: If file is missing, not owned, or in trash.
        InvalidArgumentError: If expires_at is not in the future.
    """
    file_instance = get_file(owner, file_id)

    now = timezone.now()
    if expires_at is None:
        expires_at = now + timedelta(days=settings.SHARE_DEFAULT_EXPIRY_DAYS)
    elif expires_at <= now:
        raise InvalidArgumentError('expiresAt must be in the future')

    share = Share.objects.create(
        token=generate_token(),
        expires_at=expires_at,
        file=file_instance,
        created_by=owner,
    )

    logger.info(
        'Share created for file %s by user %s (expires %s)',
        file_instance.id,
        owner.id,
        expires_at.isoformat(),
    )
    return share


def resolve_share(token: str) -> ResolvedShare:
    """Resolve a public token into a fresh download link.

    Inactive, expired and deleted-file shares all look the same to the
    anonymous caller.

    Args:
        token: Share token from the URL.

    Returns:
        ResolvedShare with a new signed URL.

    Raises:
        NotFoundError: If the share is not usable.
    """
    try:
        share = Share.objects.select_related('file').get(
            token=token,
            is_active=True,
            expires_at__gt=timezone.now(),
            file__is_deleted=False,
        )
    except Share.DoesNotExist as error:
        raise NotFoundError(_UNUSABLE_SHARE_MESSAGE) from error

    download_url = sign_object_url(share.file.storage_key)
    logger.info('Share resolved: %s (file %s)', share.id, share.file_id)
    return ResolvedShare(share=share, file=share.file, download_url=download_url)


def list_shares(owner: 'User') -> QuerySet[Share]:
    """List shares created by the caller, newest first."""
    return Share.objects.filter(created_by=owner).select_related(
        'file',
    ).order_by('-created_at')


def deactivate_share(owner: 'User', share_id: uuid.UUID | str) -> None:
    """Deactivate a share; already inactive shares stay inactive.

    Args:
        owner: Caller, must be the share's creator.
        share_id: Share primary key.

    Raises:
        NotFoundError: If share does not exist or is not the caller's.
    """
    try:
        matched = Share.objects.filter(id=share_id, created_by=owner).update(
            is_active=False,
        )
    except ValidationError as error:
        raise NotFoundError('Share not found') from error

    if not matched:
        raise NotFoundError('Share not found')

    logger.info('Share deactivated: %s by user %s', share_id, owner.id)


def expire_shares(now: datetime | None = None) -> int:
    """Deactivate every active share whose expiry has passed.

    Args:
        now: Reference time, defaults to the current time.

    Returns:
        Number of shares deactivated.
    """
    now = now or timezone.now()
    expired = Share.objects.filter(
        is_active=True,
        expires_at__lt=now,
    ).update(is_active=False)
    logger.info('Cleaned up %d expired shares', expired)
    return expired
