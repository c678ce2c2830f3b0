"""Tests for cleanup_trash management command."""

from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone

from server.apps.files.models import File


def _age(file_instance, days):
    File.all_objects.filter(id=file_instance.id).update(
        deleted_at=timezone.now() - timedelta(days=days),
    )


@pytest.mark.django_db
class TestCleanupTrashCommand:
    """Tests for cleanup_trash management command."""

    def test_cleanup_deletes_old_files(self, user, make_file):
        """Test cleanup deletes files older than 30 days."""
        file_instance = make_file(user, 'old_file.txt', deleted=True)
        _age(file_instance, 31)

        out = StringIO()
        call_command('cleanup_trash', stdout=out)

        # File should be permanently deleted
        assert not File.all_objects.filter(id=file_instance.id).exists()
        assert 'Purged 1 files from trash, 0 failed' in out.getvalue()

    def test_cleanup_preserves_recent_files(self, user, make_file):
        """Test cleanup preserves files deleted less than 30 days ago."""
        file_instance = make_file(user, 'recent_file.txt', deleted=True)
        _age(file_instance, 29)

        out = StringIO()
        call_command('cleanup_trash', stdout=out)

        # File should still exist
        assert File.all_objects.filter(id=file_instance.id).exists()
        assert 'Purged 0 files' in out.getvalue()

    def test_cleanup_never_touches_live_files(self, user, make_file):
        """Test live files survive regardless of age."""
        live = make_file(user)

        call_command('cleanup_trash', stdout=StringIO())

        assert File.objects.filter(id=live.id).exists()

    def test_dry_run_does_not_delete(self, user, make_file):
        """Test dry run only reports."""
        file_instance = make_file(user, 'old_file.txt', deleted=True)
        _age(file_instance, 31)

        out = StringIO()
        call_command('cleanup_trash', '--dry-run', stdout=out)

        assert File.all_objects.filter(id=file_instance.id).exists()
        assert 'Would delete: old_file.txt' in out.getvalue()
        assert 'Would purge 1 files from trash' in out.getvalue()

    def test_days_option_overrides_setting(self, user, make_file):
        """Test --days shortens the retention."""
        file_instance = make_file(user, deleted=True)
        _age(file_instance, 3)

        call_command('cleanup_trash', '--days', '2', stdout=StringIO())

        assert not File.all_objects.filter(id=file_instance.id).exists()

    def test_retention_from_settings(self, user, make_file, settings):
        """Test TRASH_PURGE_DAYS is the default retention."""
        settings.TRASH_PURGE_DAYS = 5
        file_instance = make_file(user, deleted=True)
        _age(file_instance, 6)

        call_command('cleanup_trash', stdout=StringIO())

        assert not File.all_objects.filter(id=file_instance.id).exists()

    def test_batch_size_limits_work(self, user, make_file):
        """Test only batch-size files are purged per run, oldest first."""
        oldest = make_file(user, 'a.txt', deleted=True)
        newer = make_file(user, 'b.txt', deleted=True)
        _age(oldest, 40)
        _age(newer, 35)

        call_command('cleanup_trash', '--batch-size', '1', stdout=StringIO())

        assert not File.all_objects.filter(id=oldest.id).exists()
        assert File.all_objects.filter(id=newer.id).exists()

    def test_rejects_non_positive_days(self):
        """Test invalid retention is refused."""
        with pytest.raises(CommandError):
            call_command('cleanup_trash', '--days', '0', stdout=StringIO())
