"""Business logic for trash (soft delete) operations.

Every state change is a conditional update keyed on ``is_deleted``,
so two racing requests cannot both win: a restore and a purge of the
same file end with exactly one of them applied.
"""

import logging
import uuid
from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from server.apps.files.models import File, Visibility
from server.common.exceptions import InvalidArgumentError, NotFoundError

if TYPE_CHECKING:
    from server.apps.accounts.models import User

logger = logging.getLogger(__name__)


def _require_ids(file_ids: Iterable[uuid.UUID | str]) -> list[uuid.UUID]:
    """Validate a batch of file ids before touching anything.

    Raises:
        InvalidArgumentError: If the batch is empty or an id is malformed.
    """
    ids = list(file_ids)
    if not ids:
        raise InvalidArgumentError('fileIds array is required')
    try:
        return [
            file_id if isinstance(file_id, uuid.UUID) else uuid.UUID(str(file_id))
            for file_id in ids
        ]
    except ValueError as error:
        raise InvalidArgumentError('fileIds must contain valid ids') from error


def soft_delete_file(owner: 'User', file_id: uuid.UUID | str) -> File:
    """Move file to trash (soft delete).

    Storage is not touched; the object stays where it is.

    Args:
        owner: Caller.
        file_id: ID of file to soft delete.

    Returns:
        Updated File instance.

    Raises:
        NotFoundError: If file not found, not owned, or already in trash.
    """
    now = timezone.now()
    try:
        updated = File.objects.filter(id=file_id, owner=owner).update(
            is_deleted=True,
            deleted_at=now,
            updated_at=now,
        )
    except ValidationError as error:
        raise NotFoundError('File not found') from error

    if not updated:
        raise NotFoundError('File not found')

    logger.info('File moved to trash: %s (owner: %s)', file_id, owner.id)
    return File.all_objects.get(id=file_id)


def restore_file(owner: 'User', file_id: uuid.UUID | str) -> File:
    """Restore file from trash.

    Also makes the file visible again if it was hidden from trash.

    Args:
        owner: Caller.
        file_id: ID of file to restore.

    Returns:
        Updated File instance.

    Raises:
        NotFoundError: If file is not in the caller's trash.
    """
    now = timezone.now()
    try:
        updated = File.all_objects.filter(
            id=file_id,
            owner=owner,
            is_deleted=True,
        ).update(
            is_deleted=False,
            deleted_at=None,
            visibility=Visibility.VISIBLE,
            updated_at=now,
        )
    except ValidationError as error:
        raise NotFoundError('File not found in trash') from error

    if not updated:
        raise NotFoundError('File not found in trash')

    logger.info('File restored: %s (owner: %s)', file_id, owner.id)
    return File.objects.get(id=file_id)


def hide_from_trash(
    owner: 'User',
    file_ids: Iterable[uuid.UUID | str],
) -> int:
    """Hide trashed files from the trash listing.

    Hidden files are still in trash: they can be restored by id and
    are purged by the sweep like any other trashed file.

    Args:
        owner: Caller.
        file_ids: Files to hide.

    Returns:
        Number of files hidden.

    Raises:
        InvalidArgumentError: If the batch is empty or malformed.
    """
    ids = _require_ids(file_ids)
    hidden = File.all_objects.filter(
        owner=owner,
        id__in=ids,
        is_deleted=True,
    ).update(
        visibility=Visibility.HIDDEN_FROM_TRASH,
        updated_at=timezone.now(),
    )
    logger.info('Hid %d files from trash (owner: %s)', hidden, owner.id)
    return hidden


def permanent_delete_files(
    owner: 'User',
    file_ids: Iterable[uuid.UUID | str],
) -> int:
    """Permanently delete files from trash.

    Rows are locked and deleted first; storage objects (and previews)
    are removed by the post_delete handler once the transaction
    commits. Ids that are not in the caller's trash are skipped.

    Args:
        owner: Caller.
        file_ids: Files to delete.

    Returns:
        Number of files deleted.

    Raises:
        InvalidArgumentError: If the batch is empty or malformed.
    """
    ids = _require_ids(file_ids)

    with transaction.atomic():
        locked_ids = list(
            File.all_objects.select_for_update().filter(
                owner=owner,
                id__in=ids,
                is_deleted=True,
            ).values_list('id', flat=True),
        )
        if not locked_ids:
            return 0

        # Delete triggers post_delete signal for S3 cleanup
        _, deleted_per_model = File.all_objects.filter(
            id__in=locked_ids,
            is_deleted=True,
        ).delete()

    deleted = deleted_per_model.get(File._meta.label, 0)
    logger.info(
        'Permanently deleted %d files (owner: %s)',
        deleted,
        owner.id,
    )
    return deleted


def get_expired_trash(cutoff: datetime, limit: int | None = None) -> list[File]:
    """Get trashed files deleted before the cutoff, oldest first.

    Args:
        cutoff: Files with deleted_at before this are expired.
        limit: Maximum number of files to return.

    Returns:
        Expired files.
    """
    queryset = File.all_objects.filter(
        is_deleted=True,
        deleted_at__lt=cutoff,
    ).select_related('owner').order_by('deleted_at')
    if limit is not None:
        queryset = queryset[:limit]
    return list(queryset)


def purge_old_trash(cutoff: datetime, limit: int | None = None) -> tuple[int, int]:
    """Permanently delete trash older than the cutoff.

    Each file is purged on its own so one failure does not stop the
    sweep. A file restored in the meantime is simply skipped.

    Args:
        cutoff: Files with deleted_at before this are purged.
        limit: Maximum number of files to process.

    Returns:
        Tuple of (purged, failed).
    """
    purged = 0
    failed = 0
    for file_instance in get_expired_trash(cutoff, limit):
        try:
            purged += permanent_delete_files(
                file_instance.owner,
                [file_instance.id],
            )
        except Exception:
            logger.exception(
                'Failed to purge file from trash: %s',
                file_instance.id,
            )
            failed += 1

    logger.info('Trash sweep purged %d files, %d failed', purged, failed)
    return purged, failed
