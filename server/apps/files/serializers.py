"""JSON projections of files and tags."""

from typing import Any

from server.apps.files.logic.file_operations import SearchResult
from server.apps.files.models import File, Tag


def serialize_file(file_instance: File) -> dict[str, Any]:
    """Public projection of a File."""
    return {
        'id': str(file_instance.id),
        'name': file_instance.name,
        'originalName': file_instance.original_name,
        'size': file_instance.size,
        'mimeType': file_instance.mime_type,
        'storageKey': file_instance.storage_key,
        'previewKey': file_instance.preview_key or None,
        'tags': file_instance.get_tags(),
        'folder': file_instance.folder,
        'isDeleted': file_instance.is_deleted,
        'deletedAt': (
            file_instance.deleted_at.isoformat()
            if file_instance.deleted_at
            else None
        ),
        'createdAt': file_instance.created_at.isoformat(),
        'updatedAt': file_instance.updated_at.isoformat(),
    }


def serialize_search_result(result: SearchResult) -> dict[str, Any]:
    """Files plus pagination block."""
    return {
        'files': [serialize_file(found) for found in result.files],
        'pagination': {
            'page': result.page,
            'limit': result.limit,
            'total': result.total,
            'totalPages': result.total_pages,
        },
    }


def serialize_tag(tag: Tag) -> dict[str, Any]:
    """Public projection of a palette Tag."""
    return {
        'id': str(tag.id),
        'name': tag.name,
        'color': tag.color or None,
        'createdAt': tag.created_at.isoformat(),
    }
