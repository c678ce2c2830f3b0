"""Tests for thumbnail generation."""

from io import BytesIO

from PIL import Image

from server.apps.files.infrastructure import preview
from server.apps.files.infrastructure.preview import generate_preview


def test_generate_preview_fits_bounding_box(png_bytes):
    """Test that an 800x600 image shrinks into 300x300 keeping ratio."""
    preview = generate_preview(png_bytes, 'image/png')

    assert preview is not None
    with Image.open(BytesIO(preview)) as image:
        assert image.format == 'JPEG'
        assert image.size == (300, 225)


def test_generate_preview_does_not_enlarge():
    """Test that small images keep their size."""
    buffer = BytesIO()
    Image.new('RGBA', (40, 20)).save(buffer, format='PNG')

    preview = generate_preview(buffer.getvalue(), 'image/png')

    assert preview is not None
    with Image.open(BytesIO(preview)) as image:
        assert image.size == (40, 20)
        assert image.mode == 'RGB'


def test_generate_preview_skips_non_images():
    """Test that documents get no preview."""
    assert generate_preview(b'%PDF-1.4', 'application/pdf') is None


def test_generate_preview_swallows_corrupt_images():
    """Test that undecodable bytes produce no preview instead of an error."""
    assert generate_preview(b'not really a png', 'image/png') is None


def test_generate_preview_swallows_decoder_syntax_error(png_bytes, monkeypatch):
    """Test that Pillow's SyntaxError for broken chunks means no preview."""

    def broken_decoder(data):
        raise SyntaxError('broken PNG file')

    monkeypatch.setattr(preview, 'generate_image_preview', broken_decoder)

    assert preview.generate_preview(png_bytes, 'image/png') is None
