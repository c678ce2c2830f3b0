"""Management command to deactivate expired share links."""

from typing import Any

from django.core.management.base import BaseCommand

from server.apps.shares.logic.share_operations import expire_shares


class Command(BaseCommand):
    """Deactivate active shares whose expiry has passed."""

    help = 'Deactivate expired share links'

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the sweep.

        Args:
            args: Positional arguments (unused).
            options: Command options (unused).
        """
        expired = expire_shares()
        self.stdout.write(
            self.style.SUCCESS(f'Deactivated {expired} expired shares'),
        )
