"""Management command running every periodic cleanup task."""

from typing import Any

from django.core.management import call_command
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    """Expire share links, then purge old trash.

    Meant to be run from cron; safe to re-run.
    """

    help = 'Run expire_shares and cleanup_trash'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report trash that would be purged without deleting it',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute both sweeps.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        self.stdout.write('Starting cleanup')
        call_command('expire_shares', stdout=self.stdout, stderr=self.stderr)
        call_command(
            'cleanup_trash',
            dry_run=options['dry_run'],
            stdout=self.stdout,
            stderr=self.stderr,
        )
        self.stdout.write(self.style.SUCCESS('Cleanup completed'))
