"""Management command to clean up old files from trash."""

import logging
from datetime import timedelta
from typing import Any, Final

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from server.apps.files.logic.trash_operations import get_expired_trash, purge_old_trash

_DEFAULT_BATCH_SIZE: Final = 1000

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Permanently delete files that have been in trash too long."""

    help = 'Clean up old files from trash (TRASH_PURGE_DAYS, default 30)'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=_DEFAULT_BATCH_SIZE,
            help=f'Max files to process (default: {_DEFAULT_BATCH_SIZE})',
        )
        parser.add_argument(
            '--days',
            type=int,
            default=None,
            help='Retention in days (default: TRASH_PURGE_DAYS)',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the cleanup command.

        Args:
            args: Positional arguments (unused).
            options: Command options.

        Raises:
            CommandError: If retention or batch size is not positive.
        """
        dry_run = options['dry_run']
        batch_size = options['batch_size']
        retention_days = options['days']
        if retention_days is None:
            retention_days = settings.TRASH_PURGE_DAYS

        if retention_days < 1 or batch_size < 1:
            raise CommandError('--days and --batch-size must be positive')

        cutoff = timezone.now() - timedelta(days=retention_days)

        self.stdout.write(
            f'Looking for files deleted before {cutoff} '
            f'(older than {retention_days} days)',
        )

        if dry_run:
            old_files = get_expired_trash(cutoff, batch_size)
            for file_instance in old_files:
                self.stdout.write(
                    f'Would delete: {file_instance.original_name} '
                    f'(owner: {file_instance.owner.email}, '
                    f'deleted: {file_instance.deleted_at})',
                )
            self.stdout.write(
                self.style.SUCCESS(
                    f'Would purge {len(old_files)} files from trash',
                ),
            )
            return

        purged, failed = purge_old_trash(cutoff, batch_size)
        if failed:
            self.stderr.write(f'Failed to purge {failed} files, see log')
        self.stdout.write(
            self.style.SUCCESS(
                f'Purged {purged} files from trash, {failed} failed',
            ),
        )
