"""Signal handlers for files app."""

import functools
import logging
from collections.abc import Sequence

from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from server.apps.files.models import File

logger = logging.getLogger(__name__)


def delete_objects(storage_names: Sequence[str]) -> None:
    """Delete objects from storage, tolerating missing ones.

    Failures are logged and never raised: the database rows are
    already gone, so anything left behind is an orphan for operators.

    Args:
        storage_names: Keys to delete.
    """
    for storage_name in storage_names:
        try:
            if default_storage.exists(storage_name):
                default_storage.delete(storage_name)
                logger.info('File deleted from storage: %s', storage_name)
            else:
                logger.warning(
                    'File not found in storage (already deleted?): %s',
                    storage_name,
                )
        except Exception:
            logger.exception(
                'Failed to delete file from storage (orphaned): %s',
                storage_name,
            )


@receiver(post_delete, sender=File)
def delete_file_from_storage(
    sender: type[File],
    instance: File,
    **kwargs: object,
) -> None:
    """Delete object and preview from storage when File record is deleted.

    Runs after the surrounding transaction commits, so a rolled back
    purge keeps its bytes.

    Args:
        sender: The File model class.
        instance: The File instance being deleted.
        **kwargs: Additional signal arguments.
    """
    storage_names = [
        name for name in (instance.storage_key, instance.preview_key) if name
    ]
    if not storage_names:
        return

    logger.info(
        'Scheduling storage delete after DB delete: %s',
        ', '.join(storage_names),
    )
    transaction.on_commit(functools.partial(delete_objects, storage_names))
