"""Custom storage backend for S3-compatible storage."""

import logging
from typing import Any, final, override
from urllib.parse import quote

from botocore.exceptions import BotoCoreError, ClientError
from storages.backends.s3 import S3Storage
from storages.utils import clean_name

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """Custom S3 storage backend for user files.

    Extends django-storages S3Storage with:
    - Writes carrying explicit content type and audit metadata
    - Best-effort rollback for uploads whose DB record failed
    - Pre-signed download links with a caller-chosen lifetime
    - Bucket reachability check
    """

    def put_object(
        self,
        name: str,
        data: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> str:
        """Write bytes to storage at exactly ``name``.

        Unlike ``save`` this never renames on collision; callers check
        ``exists`` first and report the conflict themselves.

        Args:
            name: Storage key.
            data: Object payload.
            content_type: MIME type stored with the object.
            metadata: User metadata; values are percent-encoded since S3
                only accepts ASCII header values.

        Returns:
            Storage key the object was written to.

        Raises:
            Exception: If the S3 request fails.
        """
        key = self._normalize_name(clean_name(name))
        encoded_metadata = {
            meta_key: quote(meta_value, safe='')
            for meta_key, meta_value in (metadata or {}).items()
        }
        try:
            logger.info('Uploading object to storage: %s', key)
            self.bucket.Object(key).put(
                Body=data,
                ContentType=content_type,
                Metadata=encoded_metadata,
            )
        except Exception:
            logger.exception('Failed to upload object to storage: %s', key)
            raise
        logger.info('Successfully uploaded object: %s (%d bytes)', key, len(data))
        return name

    @override
    def delete(self, name: str) -> None:
        """Delete file from S3 with error handling and logging.

        Args:
            name: Storage path of file to delete.

        Raises:
            Exception: If S3 delete fails.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            super().delete(name)
            logger.info('Successfully deleted file: %s', name)
        except Exception:
            logger.exception('Failed to delete file from storage: %s', name)
            raise

    def rollback_upload(self, name: str) -> None:
        """Delete uploaded file for DB transaction rollback.

        This method is called when a database transaction fails after
        a file has been successfully uploaded to S3. It attempts to
        delete the file to maintain consistency.

        This is a best-effort operation - if deletion fails, the error
        is logged but not raised, as the DB rollback has already occurred.

        Args:
            name: Storage path of file to delete.
        """
        try:
            logger.warning('Rolling back upload, deleting file: %s', name)
            self.delete(name)
            logger.info('Successfully rolled back file upload: %s', name)
        except Exception:
            # The object stays in storage without a database row
            logger.exception(
                'Failed to rollback upload, orphaned file: %s',
                name,
            )

    def signed_url(self, name: str, expires_in: int | None = None) -> str:
        """Build a pre-signed GET link for an object.

        Args:
            name: Storage key.
            expires_in: Lifetime in seconds, defaults to querystring_expire.

        Returns:
            Time-boxed URL usable without credentials.
        """
        return self.url(name, expire=expires_in or self.querystring_expire)

    def check_health(self) -> dict[str, Any]:
        """Check that the configured bucket is reachable.

        Returns:
            Dict with ``ok``, ``bucket``, ``region`` and, on failure,
            ``error``.
        """
        status: dict[str, Any] = {
            'ok': True,
            'bucket': self.bucket_name,
            'region': self.region_name,
        }
        try:
            self.connection.meta.client.head_bucket(Bucket=self.bucket_name)
        except (BotoCoreError, ClientError) as error:
            logger.exception('Storage health check failed: %s', self.bucket_name)
            status['ok'] = False
            status['error'] = str(error)
        return status
