"""Tests for files admin configuration."""

import pytest
from django.contrib import admin

from server.apps.files.admin import FileAdmin
from server.apps.files.models import File


@pytest.fixture
def file_admin():
    """FileAdmin bound to the default admin site."""
    return FileAdmin(File, admin.site)


@pytest.mark.django_db
class TestFileAdminColumns:
    """Tests for computed FileAdmin columns."""

    def test_category_and_extension(self, user, file_admin):
        """Test columns are read from the key and the resolved name."""
        file_instance = File.objects.create(
            owner=user,
            name='report.PDF',
            original_name='report.PDF',
            size=2048,
            mime_type='application/pdf',
            storage_key=f'{user.id}/files/report.PDF',
        )

        assert file_admin.category_display(file_instance) == 'files'
        assert file_admin.extension_display(file_instance) == 'pdf'
        assert file_admin.size_display(file_instance) == '2.0 KB'

    def test_missing_extension(self, user, make_file, file_admin):
        """Test names without an extension show a dash."""
        file_instance = make_file(user, 'README')

        assert file_admin.extension_display(file_instance) == '-'

    def test_admin_lists_trashed_files(self, user, make_file, file_admin, rf):
        """Test trash is visible to operators."""
        trashed = make_file(user, deleted=True)

        assert trashed in file_admin.get_queryset(rf.get('/admin/'))
