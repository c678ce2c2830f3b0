"""Tests for metadata utilities."""

import pytest

from server.apps.files.infrastructure.metadata import (
    build_preview_key,
    build_storage_key,
    classify_category,
    detect_mime_type,
    get_file_extension,
    is_mime_type_allowed,
    resolve_final_name,
    validate_storage_path,
)
from server.common.exceptions import InvalidArgumentError


def test_detect_mime_type():
    """Test MIME type detection from filename."""
    assert detect_mime_type('test.pdf') == 'application/pdf'
    assert detect_mime_type('test.jpg') == 'image/jpeg'
    assert detect_mime_type('test.png') == 'image/png'


def test_detect_mime_type_unknown():
    """Test MIME type detection for unknown extension."""
    assert detect_mime_type('test.unknown') == 'application/octet-stream'


@pytest.mark.parametrize(('mime_type', 'category'), [
    ('image/png', 'image'),
    ('video/mp4', 'video'),
    ('application/pdf', 'files'),
    ('text/plain', 'files'),
])
def test_classify_category(mime_type, category):
    """MIME class picks the storage category."""
    assert classify_category(mime_type) == category


class TestResolveFinalName:
    """Tests for final name resolution."""

    def test_keeps_existing_extension_and_case(self):
        """Test that 'report.PDF' is left alone."""
        assert resolve_final_name('report.PDF', 'application/pdf') == 'report.PDF'

    def test_appends_extension_from_mime_type(self):
        """Test that a bare name gets the MIME type's extension."""
        assert resolve_final_name('scan', 'application/pdf') == 'scan.pdf'

    def test_desired_name_wins(self):
        """Test that the desired name replaces the original one."""
        final_name = resolve_final_name(
            'IMG_0001.png',
            'image/png',
            desired_name='holiday',
        )
        assert final_name == 'holiday.png'

    def test_collapses_whitespace_and_separators(self):
        """Test whitespace runs and path separators are normalized."""
        final_name = resolve_final_name(
            '  my   summer\\trip/day1.png ',
            'image/png',
        )
        assert final_name == 'my summer-trip-day1.png'

    def test_unknown_mime_type_keeps_bare_name(self):
        """Test no extension is invented for unknown types."""
        assert resolve_final_name('blob', 'application/x-made-up') == 'blob'

    def test_empty_name_falls_back(self):
        """Test that an empty name still yields a usable name."""
        final_name = resolve_final_name('   ', 'application/pdf')
        assert final_name.startswith('file-')
        assert final_name.endswith('.pdf')


def test_build_storage_and_preview_keys():
    """Test key layout for objects and thumbnails."""
    storage_key = build_storage_key('u1', 'image', 'cat.png')

    assert storage_key == 'u1/image/cat.png'
    assert build_preview_key(storage_key) == 'u1/image/cat.png_preview.jpg'


def test_get_file_extension():
    """Test file extension extraction."""
    assert get_file_extension('test.pdf') == 'pdf'
    assert get_file_extension('test.PDF') == 'pdf'
    assert get_file_extension('archive.tar.gz') == 'gz'
    assert not get_file_extension('noextension')


def test_validate_storage_path_valid():
    """Test validation of valid storage path."""
    validate_storage_path('u1', 'u1/files/test.txt')


@pytest.mark.parametrize('storage_path', [
    '',
    'u1',
    'u2/files/test.txt',
    'u1/../u2/files/test.txt',
])
def test_validate_storage_path_invalid(storage_path):
    """Test that foreign, empty and traversal paths are rejected."""
    with pytest.raises(InvalidArgumentError):
        validate_storage_path('u1', storage_path)


class TestIsMimeTypeAllowed:
    """Tests for the upload allow-list."""

    allowed = ('image/*', 'application/pdf')

    def test_wildcard_match(self):
        """Test 'image/*' admits any image."""
        assert is_mime_type_allowed('image/webp', self.allowed)

    def test_exact_match(self):
        """Test exact entries match exactly."""
        assert is_mime_type_allowed('application/pdf', self.allowed)

    def test_rejects_other_types(self):
        """Test everything else is refused."""
        assert not is_mime_type_allowed('application/zip', self.allowed)
        assert not is_mime_type_allowed('imagex/png', self.allowed)
