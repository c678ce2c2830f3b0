"""Thumbnail generation for image uploads."""

import io
import logging
from typing import Final

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

PREVIEW_MAX_SIZE: Final = (300, 300)
PREVIEW_QUALITY: Final = 80
PREVIEW_CONTENT_TYPE: Final = 'image/jpeg'


def generate_image_preview(data: bytes) -> bytes:
    """Render a JPEG thumbnail that fits inside PREVIEW_MAX_SIZE.

    Images smaller than the bound are not enlarged. EXIF orientation
    is applied before resizing.

    Args:
        data: Encoded image bytes.

    Returns:
        JPEG-encoded thumbnail.

    Raises:
        Exception: Whatever Pillow raises for unreadable or corrupt data.
    """
    with Image.open(io.BytesIO(data)) as source:
        image = ImageOps.exif_transpose(source) or source
        image = image.convert('RGB')
        image.thumbnail(PREVIEW_MAX_SIZE, Image.Resampling.LANCZOS)
        buffer = io.BytesIO()
        image.save(buffer, format='JPEG', quality=PREVIEW_QUALITY)
    return buffer.getvalue()


def generate_preview(data: bytes, mime_type: str) -> bytes | None:
    """Generate a preview for supported types.

    Preview is best-effort: a failure is logged and reported as
    "no preview" so it never blocks an upload.

    Args:
        data: Uploaded bytes.
        mime_type: MIME type of the upload.

    Returns:
        JPEG thumbnail bytes, or None when unsupported or failed.
    """
    if not mime_type.startswith('image/'):
        logger.debug('No preview generation available for: %s', mime_type)
        return None

    try:
        preview = generate_image_preview(data)
    except Exception:
        # Pillow reports corrupt chunks as SyntaxError, among others
        logger.warning('Failed to generate image preview', exc_info=True)
        return None

    logger.info('Image preview generated (%d bytes)', len(preview))
    return preview
