"""HTTP views for files, trash and the tag palette."""

import json
import logging
import uuid
from typing import Any, Final

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from server.apps.accounts.decorators import jwt_required
from server.apps.files.exceptions import UploadRejectedError
from server.apps.files.infrastructure.metadata import is_mime_type_allowed
from server.apps.files.logic import file_operations, tag_operations, trash_operations
from server.apps.files.serializers import (
    serialize_file,
    serialize_search_result,
    serialize_tag,
)
from server.common.exceptions import InvalidArgumentError
from server.common.parsing import parse_json_body, parse_positive_int, parse_uuid_list
from server.common.responses import error_response, success_response

logger = logging.getLogger(__name__)

_NAME_MAX_LENGTH: Final = 255
_TRUE_VALUES: Final = frozenset(('true', '1'))


def _wants_deleted(request: HttpRequest) -> bool:
    return request.GET.get('deleted', '').lower() in _TRUE_VALUES


def _parse_tags_field(raw_tags: str | None) -> list[Any]:
    """Decode the multipart ``tags`` field (a JSON array of strings)."""
    if not raw_tags:
        return []
    try:
        tags = json.loads(raw_tags)
    except ValueError as error:
        raise InvalidArgumentError('tags must be a JSON array') from error
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise InvalidArgumentError('tags must be a JSON array of strings')
    return tags


@require_GET
@jwt_required
def file_list(request: HttpRequest) -> HttpResponse:
    """List live files, or trash with ``?deleted=true``."""
    files = file_operations.list_files(
        request.api_user,  # type: ignore[attr-defined]
        include_deleted=_wants_deleted(request),
    )
    return success_response([serialize_file(found) for found in files])


@csrf_exempt
@require_POST
@jwt_required
def upload(request: HttpRequest) -> HttpResponse:
    """Accept a multipart upload and store it."""
    uploaded = request.FILES.get('file')
    if uploaded is None:
        raise InvalidArgumentError('No file uploaded')

    if uploaded.size > settings.MAX_UPLOAD_SIZE:
        raise UploadRejectedError('File too large')

    mime_type = uploaded.content_type or ''
    if not is_mime_type_allowed(mime_type, settings.ALLOWED_FILE_TYPES):
        raise UploadRejectedError('File type not allowed')

    name = request.POST.get('name') or None
    if name is not None and len(name) > _NAME_MAX_LENGTH:
        raise InvalidArgumentError(
            f'name must be at most {_NAME_MAX_LENGTH} characters',
        )

    logger.info(
        'Uploading file: %s (%d bytes, %s, owner: %s)',
        uploaded.name,
        uploaded.size,
        mime_type,
        request.api_user.id,  # type: ignore[attr-defined]
    )

    file_instance = file_operations.upload_file(
        owner=request.api_user,  # type: ignore[attr-defined]
        data=uploaded.read(),
        mime_type=mime_type,
        size=uploaded.size,
        original_name=uploaded.name or '',
        name=name,
        folder=request.POST.get('folder') or None,
        tags=_parse_tags_field(request.POST.get('tags')),
    )
    return success_response(serialize_file(file_instance), status=201)


@require_GET
@jwt_required
def search(request: HttpRequest) -> HttpResponse:
    """Search live files by name, tag, type and folder."""
    raw_tags = request.GET.get('tags')
    result = file_operations.search_files(
        request.api_user,  # type: ignore[attr-defined]
        query=request.GET.get('q') or None,
        mime_type_prefix=request.GET.get('type') or None,
        tags=raw_tags.split(',') if raw_tags else None,
        folder=request.GET.get('folder') or None,
        page=parse_positive_int(request.GET.get('page'), 'page', default=1),
        page_size=parse_positive_int(
            request.GET.get('limit'),
            'limit',
            default=file_operations.DEFAULT_PAGE_SIZE,
            maximum=file_operations.MAX_PAGE_SIZE,
        ),
    )
    return success_response(serialize_search_result(result))


@csrf_exempt
@require_http_methods(['GET', 'DELETE'])
@jwt_required
def file_detail(request: HttpRequest, file_id: uuid.UUID) -> HttpResponse:
    """Return file metadata (GET) or move the file to trash (DELETE)."""
    owner = request.api_user  # type: ignore[attr-defined]
    if request.method == 'DELETE':
        trash_operations.soft_delete_file(owner, file_id)
        return success_response(message='File deleted successfully')

    file_instance = file_operations.get_file(owner, file_id)
    return success_response(serialize_file(file_instance))


@require_GET
@jwt_required
def download(request: HttpRequest, file_id: uuid.UUID) -> HttpResponse:
    """Return a signed download URL."""
    download_url = file_operations.get_download_url(
        request.api_user,  # type: ignore[attr-defined]
        file_id,
        include_deleted=_wants_deleted(request),
    )
    return success_response({
        'downloadUrl': download_url,
        'expiresIn': settings.SIGNED_URL_EXPIRY_SECONDS,
    })


@require_GET
@jwt_required
def preview(request: HttpRequest, file_id: uuid.UUID) -> HttpResponse:
    """Return a signed preview URL, or null when there is no preview."""
    preview_url = file_operations.get_preview_url(
        request.api_user,  # type: ignore[attr-defined]
        file_id,
        include_deleted=_wants_deleted(request),
    )
    return success_response({
        'previewUrl': preview_url,
        'hasPreview': preview_url is not None,
    })


@csrf_exempt
@require_http_methods(['PATCH'])
@jwt_required
def restore(request: HttpRequest, file_id: uuid.UUID) -> HttpResponse:
    """Take a file out of trash."""
    trash_operations.restore_file(request.api_user, file_id)  # type: ignore[attr-defined]
    return success_response(message='File restored successfully')


@csrf_exempt
@require_POST
@jwt_required
def trash_hide(request: HttpRequest) -> HttpResponse:
    """Hide trashed files from the trash listing."""
    file_ids = parse_uuid_list(parse_json_body(request).get('fileIds'))
    hidden = trash_operations.hide_from_trash(
        request.api_user,  # type: ignore[attr-defined]
        file_ids,
    )
    return success_response({'hidden': hidden})


@csrf_exempt
@require_POST
@jwt_required
def trash_delete(request: HttpRequest) -> HttpResponse:
    """Permanently delete trashed files."""
    file_ids = parse_uuid_list(parse_json_body(request).get('fileIds'))
    deleted = trash_operations.permanent_delete_files(
        request.api_user,  # type: ignore[attr-defined]
        file_ids,
    )
    return success_response({'deleted': deleted})


@require_GET
@jwt_required
def storage_health(request: HttpRequest) -> HttpResponse:
    """Report object store reachability."""
    status = file_operations.check_storage_health()
    if status['ok']:
        return success_response(status)
    return error_response('Storage unavailable', status=503, details=status)


@csrf_exempt
@require_http_methods(['GET', 'POST'])
@jwt_required
def tag_list(request: HttpRequest) -> HttpResponse:
    """List the palette (GET) or add a tag to it (POST)."""
    user = request.api_user  # type: ignore[attr-defined]
    if request.method == 'POST':
        payload = parse_json_body(request)
        name = payload.get('name')
        color = payload.get('color') or ''
        if not isinstance(name, str) or not isinstance(color, str):
            raise InvalidArgumentError('name and color must be strings')
        tag = tag_operations.create_tag(user, name, color)
        return success_response(serialize_tag(tag), status=201)

    tags = tag_operations.list_tags(user)
    return success_response([serialize_tag(tag) for tag in tags])


@csrf_exempt
@require_http_methods(['DELETE'])
@jwt_required
def tag_detail(request: HttpRequest, tag_id: uuid.UUID) -> HttpResponse:
    """Remove a tag from the palette."""
    tag_operations.delete_tag(request.api_user, tag_id)  # type: ignore[attr-defined]
    return success_response(message='Tag deleted successfully')
