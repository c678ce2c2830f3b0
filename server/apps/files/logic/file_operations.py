"""Business logic for file operations."""

import logging
import math
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from server.apps.files.exceptions import StorageKeyConflictError
from server.apps.files.infrastructure.metadata import (
    build_preview_key,
    build_storage_key,
    classify_category,
    detect_mime_type,
    resolve_final_name,
    validate_storage_path,
)
from server.apps.files.infrastructure.preview import (
    PREVIEW_CONTENT_TYPE,
    generate_preview,
)
from server.apps.files.models import File, FileTag, Visibility
from server.common.exceptions import InvalidArgumentError, NotFoundError

if TYPE_CHECKING:
    from server.apps.accounts.models import User
    from server.apps.files.infrastructure.storage import FileStorage

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE: Final = 20
MAX_PAGE_SIZE: Final = 100
_TAG_MAX_LENGTH: Final = 100
_NOT_FOUND_MESSAGE: Final = 'File not found'


@dataclass(frozen=True, slots=True)
class SearchResult:
    """One page of search results."""

    files: list[File]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Number of pages for the same filter."""
        return math.ceil(self.total / self.limit) if self.limit else 0


def _get_storage() -> 'FileStorage':
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def normalize_tags(tags: Iterable[Any] | None) -> list[str]:
    """Clean a tag list: strip, drop blanks, de-duplicate in order.

    Args:
        tags: Raw tags from the request.

    Returns:
        Cleaned tag names.

    Raises:
        InvalidArgumentError: If a tag is not a string or too long.
    """
    cleaned: list[str] = []
    for tag in tags or ():
        if not isinstance(tag, str):
            raise InvalidArgumentError('tags must be strings')
        tag = tag.strip()
        if not tag or tag in cleaned:
            continue
        if len(tag) > _TAG_MAX_LENGTH:
            raise InvalidArgumentError(
                f'Tags must be at most {_TAG_MAX_LENGTH} characters',
            )
        cleaned.append(tag)
    return cleaned


def _owned_files(owner: 'User', include_deleted: bool = False) -> QuerySet[File]:
    manager = File.all_objects if include_deleted else File.objects
    return manager.filter(owner=owner)


def upload_file(  # noqa: WPS211
    owner: 'User',
    data: bytes,
    mime_type: str,
    size: int,
    original_name: str,
    name: str | None = None,
    folder: str | None = None,
    tags: Iterable[str] | None = None,
) -> File:
    """Upload file to storage and create database record.

    Transaction safety: Upload to storage first, then create DB record.
    If the DB write fails, the uploaded objects are deleted from
    storage (compensating rollback).

    Args:
        owner: Owner of the file.
        data: File content.
        mime_type: MIME type sent by the client.
        size: Size in bytes as reported by the upload.
        original_name: Filename sent by the client.
        name: Optional desired storage name.
        folder: Optional folder label.
        tags: Optional free-text tags.

    Returns:
        Created File instance.

    Raises:
        StorageKeyConflictError: If an object already exists at the key.
        InvalidArgumentError: If the resolved key is invalid.
        Exception: If upload or DB operation fails.
    """
    mime_type = mime_type or detect_mime_type(original_name)
    tag_names = normalize_tags(tags)
    category = classify_category(mime_type)
    final_name = resolve_final_name(original_name, mime_type, desired_name=name)
    storage_key = build_storage_key(owner.id, category, final_name)

    # Validate storage path follows user isolation rules
    validate_storage_path(owner.id, storage_key)

    storage = _get_storage()

    if storage.exists(storage_key):
        logger.info('Upload rejected, key already taken: %s', storage_key)
        raise StorageKeyConflictError(storage_key)

    # Step 1: Upload to storage first
    storage.put_object(
        storage_key,
        data,
        content_type=mime_type,
        metadata={
            'original-name': original_name,
            'uploaded-by': str(owner.id),
            'uploaded-at': timezone.now().isoformat(),
        },
    )

    # Step 2: Preview and database record; the object is rolled back
    # if either fails unexpectedly
    preview_key = ''
    try:
        preview_key = _store_preview(storage, storage_key, data, mime_type)
        with transaction.atomic():
            file_instance = File.objects.create(
                owner=owner,
                name=final_name,
                original_name=original_name,
                size=size,
                mime_type=mime_type,
                storage_key=storage_key,
                preview_key=preview_key,
                folder=folder or None,
            )
            FileTag.objects.bulk_create(
                FileTag(file=file_instance, name=tag) for tag in tag_names
            )
    except IntegrityError as error:
        # A concurrent upload won the key; its row owns the object now
        logger.warning('Storage key claimed concurrently: %s', storage_key)
        raise StorageKeyConflictError(storage_key) from error
    except Exception:
        logger.exception(
            'Upload failed after storage write, rolling back: %s',
            storage_key,
        )
        storage.rollback_upload(storage_key)
        if preview_key:
            storage.rollback_upload(preview_key)
        raise

    logger.info(
        'File uploaded successfully: %s (ID: %s, owner: %s)',
        storage_key,
        file_instance.id,
        owner.id,
    )
    return file_instance


def _store_preview(
    storage: 'FileStorage',
    storage_key: str,
    data: bytes,
    mime_type: str,
) -> str:
    """Generate and upload a thumbnail; failures only cost the preview."""
    preview = generate_preview(data, mime_type)
    if preview is None:
        return ''

    preview_key = build_preview_key(storage_key)
    try:
        if storage.exists(preview_key):
            # Key belongs to another upload; never overwrite it
            logger.warning('Preview key already taken, skipping: %s', preview_key)
            return ''
        storage.put_object(
            preview_key,
            preview,
            content_type=PREVIEW_CONTENT_TYPE,
            metadata={
                'original-file': storage_key,
                'generated-at': timezone.now().isoformat(),
            },
        )
    except Exception:
        logger.exception('Failed to upload preview: %s', preview_key)
        return ''
    return preview_key


def get_file(
    owner: 'User',
    file_id: uuid.UUID | str,
    include_deleted: bool = False,
) -> File:
    """Get a file owned by the caller.

    Files of other users are reported exactly like missing ones.

    Args:
        owner: Caller.
        file_id: File primary key.
        include_deleted: Whether files in trash are visible.

    Returns:
        File instance.

    Raises:
        NotFoundError: If file is missing, not owned, or in trash.
    """
    try:
        return _owned_files(owner, include_deleted).prefetch_related(
            'file_tags',
        ).get(id=file_id)
    except (File.DoesNotExist, ValidationError) as error:
        raise NotFoundError(_NOT_FOUND_MESSAGE) from error


def list_files(owner: 'User', include_deleted: bool = False) -> QuerySet[File]:
    """List live files, or the trash view when include_deleted is set.

    The trash view leaves out files hidden from trash.

    Args:
        owner: Owner of files.
        include_deleted: List trash instead of live files.

    Returns:
        QuerySet of files, newest first.
    """
    if include_deleted:
        queryset = File.all_objects.filter(owner=owner, is_deleted=True).exclude(
            visibility=Visibility.HIDDEN_FROM_TRASH,
        )
    else:
        queryset = File.objects.filter(owner=owner)

    return queryset.order_by('-created_at').prefetch_related('file_tags')


def search_files(  # noqa: WPS211
    owner: 'User',
    query: str | None = None,
    mime_type_prefix: str | None = None,
    tags: Iterable[str] | None = None,
    folder: str | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> SearchResult:
    """Search live files.

    ``query`` matches a case-insensitive substring of the original name
    OR an exact tag. Every other active filter is AND-ed: MIME type
    prefix, at least one of ``tags``, exact folder.

    Args:
        owner: Owner of files.
        query: Free text.
        mime_type_prefix: e.g. 'image' or 'application/pdf'.
        tags: Requested tags.
        folder: Exact folder.
        page: 1-based page number.
        page_size: Page size (1..MAX_PAGE_SIZE).

    Returns:
        SearchResult page.

    Raises:
        InvalidArgumentError: If paging arguments are out of range.
    """
    if page < 1:
        raise InvalidArgumentError('page must be at least 1')
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise InvalidArgumentError(
            f'limit must be between 1 and {MAX_PAGE_SIZE}',
        )

    queryset = File.objects.filter(owner=owner)

    if query:
        tagged_with_query = FileTag.objects.filter(name=query).values('file_id')
        queryset = queryset.filter(
            Q(original_name__icontains=query) | Q(id__in=tagged_with_query),
        )

    if mime_type_prefix:
        queryset = queryset.filter(mime_type__startswith=mime_type_prefix)

    tag_names = normalize_tags(tags)
    if tag_names:
        queryset = queryset.filter(
            id__in=FileTag.objects.filter(name__in=tag_names).values('file_id'),
        )

    if folder:
        queryset = queryset.filter(folder=folder)

    total = queryset.count()
    offset = (page - 1) * page_size
    files = list(
        queryset.order_by('-created_at').prefetch_related('file_tags')[
            offset:offset + page_size
        ],
    )

    logger.debug(
        'Search for owner %s: q=%r type=%r tags=%r -> %d hits',
        owner.id,
        query,
        mime_type_prefix,
        tag_names,
        total,
    )
    return SearchResult(files=files, total=total, page=page, limit=page_size)


def sign_object_url(storage_key: str) -> str:
    """Sign a time-boxed GET link (SIGNED_URL_EXPIRY_SECONDS) for a key."""
    return _get_storage().signed_url(
        storage_key,
        settings.SIGNED_URL_EXPIRY_SECONDS,
    )


def get_download_url(
    owner: 'User',
    file_id: uuid.UUID | str,
    include_deleted: bool = False,
) -> str:
    """Get a signed download URL for a file.

    Args:
        owner: Caller.
        file_id: File primary key.
        include_deleted: Whether files in trash can be downloaded.

    Returns:
        Pre-signed URL valid for SIGNED_URL_EXPIRY_SECONDS.

    Raises:
        NotFoundError: If file is not visible to the caller.
    """
    file_instance = get_file(owner, file_id, include_deleted)
    return sign_object_url(file_instance.storage_key)


def get_preview_url(
    owner: 'User',
    file_id: uuid.UUID | str,
    include_deleted: bool = False,
) -> str | None:
    """Get a signed URL for the file's thumbnail.

    Args:
        owner: Caller.
        file_id: File primary key.
        include_deleted: Whether files in trash are visible.

    Returns:
        Pre-signed URL, or None when the file has no preview.

    Raises:
        NotFoundError: If file is not visible to the caller.
    """
    file_instance = get_file(owner, file_id, include_deleted)
    if not file_instance.has_preview:
        return None
    return sign_object_url(file_instance.preview_key)


def check_storage_health() -> dict[str, Any]:
    """Report object store reachability."""
    return _get_storage().check_health()
