"""Metadata and naming utilities for files."""

import mimetypes
import re
import uuid
from collections.abc import Iterable
from pathlib import PurePosixPath
from typing import Final

from server.common.exceptions import InvalidArgumentError

IMAGE_CATEGORY: Final = 'image'
VIDEO_CATEGORY: Final = 'video'
FILES_CATEGORY: Final = 'files'

PREVIEW_SUFFIX: Final = '_preview.jpg'

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'
_EXTENSION_PATTERN: Final = re.compile(r'\.[A-Za-z0-9]{1,10}$')
_WHITESPACE_PATTERN: Final = re.compile(r'\s+')
_SEPARATOR_PATTERN: Final = re.compile(r'[\\/]')
_WILDCARD_SUFFIX: Final = '/*'


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from filename.

    Used when the client does not send a content type.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    return mime_type


def classify_category(mime_type: str) -> str:
    """Map a MIME type to its storage category.

    Args:
        mime_type: MIME type of the upload.

    Returns:
        'image', 'video' or 'files'.
    """
    if mime_type.startswith('image/'):
        return IMAGE_CATEGORY
    if mime_type.startswith('video/'):
        return VIDEO_CATEGORY
    return FILES_CATEGORY


def canonical_extension(mime_type: str) -> str:
    """Get the canonical extension of a MIME type.

    Args:
        mime_type: MIME type (e.g., 'image/png').

    Returns:
        Extension without dot (e.g., 'png'), empty when unknown.
    """
    extension = mimetypes.guess_extension(mime_type, strict=False)
    return (extension or '').lstrip('.')


def has_extension(filename: str) -> bool:
    """Check whether a name ends with a 1-10 char alphanumeric suffix."""
    return bool(_EXTENSION_PATTERN.search(filename))


def resolve_final_name(
    original_name: str,
    mime_type: str,
    desired_name: str | None = None,
) -> str:
    """Resolve the storage-facing name of an upload.

    Prefers the desired name over the original one, collapses
    whitespace, replaces path separators with '-' and appends the
    MIME type's extension when the name has none.

    Example: ('scan', 'application/pdf') -> 'scan.pdf'

    Args:
        original_name: Filename sent by the client.
        mime_type: MIME type of the upload.
        desired_name: Optional name chosen by the user.

    Returns:
        Final name, never empty.
    """
    base = (desired_name or original_name or '').strip()
    base = _WHITESPACE_PATTERN.sub(' ', base)
    base = _SEPARATOR_PATTERN.sub('-', base)
    if not base:
        base = f'file-{uuid.uuid4()}'

    if has_extension(base):
        return base

    extension = canonical_extension(mime_type)
    if extension:
        return f'{base}.{extension}'
    return base


def build_storage_key(owner_id: object, category: str, final_name: str) -> str:
    """Build storage key: {owner_id}/{category}/{final_name}."""
    return f'{owner_id}/{category}/{final_name}'


def build_preview_key(storage_key: str) -> str:
    """Build the thumbnail key stored next to an object."""
    return f'{storage_key}{PREVIEW_SUFFIX}'


def validate_storage_path(owner_id: object, storage_path: str) -> None:
    """Validate storage path follows user isolation rules.

    Ensures the storage path starts with the owner's ID to maintain
    multi-user isolation. This is a critical security check.

    Args:
        owner_id: Owner's user ID.
        storage_path: Proposed storage path.

    Raises:
        InvalidArgumentError: If path doesn't start with owner_id or is
            invalid.
    """
    if not storage_path:
        raise InvalidArgumentError('Storage path cannot be empty')

    path_parts = PurePosixPath(storage_path).parts
    if len(path_parts) < 2:
        raise InvalidArgumentError(
            'Storage path must have an owner and a name',
        )

    if '..' in path_parts:
        raise InvalidArgumentError('Storage path cannot contain ".."')

    if path_parts[0] != str(owner_id):
        raise InvalidArgumentError(
            f'Storage path owner ({path_parts[0]}) does not match '
            f'owner ({owner_id})',
        )


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'document.pdf').

    Returns:
        Extension without dot, lowercase (e.g., 'pdf').
        Returns empty string if no extension.
    """
    extension = PurePosixPath(filename).suffix
    return extension.lstrip('.').lower()


def is_mime_type_allowed(mime_type: str, allowed: Iterable[str]) -> bool:
    """Check a MIME type against an allow-list with 'type/*' wildcards.

    Args:
        mime_type: MIME type of the upload.
        allowed: Allowed types, e.g. ['image/*', 'application/pdf'].

    Returns:
        True if any entry matches.
    """
    for allowed_type in allowed:
        allowed_type = allowed_type.strip()
        if allowed_type.endswith(_WILDCARD_SUFFIX):
            prefix = allowed_type.removesuffix('*')
            if mime_type.startswith(prefix):
                return True
        elif mime_type == allowed_type:
            return True
    return False
