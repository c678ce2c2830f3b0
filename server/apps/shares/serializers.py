"""JSON projections of shares."""

from typing import Any

from server.apps.files.models import File
from server.apps.shares.logic.share_operations import ResolvedShare
from server.apps.shares.models import Share


def serialize_shared_file(file_instance: File) -> dict[str, Any]:
    """Read-only file projection without storage keys."""
    return {
        'id': str(file_instance.id),
        'originalName': file_instance.original_name,
        'size': file_instance.size,
        'mimeType': file_instance.mime_type,
    }


def serialize_share(share: Share) -> dict[str, Any]:
    """Owner-facing projection of a Share."""
    return {
        'id': str(share.id),
        'token': share.token,
        'expiresAt': share.expires_at.isoformat(),
        'isActive': share.is_active,
        'createdAt': share.created_at.isoformat(),
        'file': serialize_shared_file(share.file),
    }


def serialize_resolved_share(resolved: ResolvedShare) -> dict[str, Any]:
    """Public projection returned to anonymous callers."""
    return {
        'file': serialize_shared_file(resolved.file),
        'downloadUrl': resolved.download_url,
        'expiresAt': resolved.share.expires_at.isoformat(),
    }
