"""Shared fixtures for all app tests."""

import uuid
from collections.abc import Callable
from io import BytesIO

import boto3
import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from moto import mock_aws
from PIL import Image

from server.apps.accounts.logic.tokens import issue_token
from server.apps.files.models import File, FileTag

User = get_user_model()

TEST_BUCKET = 'odin-vault'


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        email='test@example.com',
        password='testpass123',
        name='Test User',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        email='other@example.com',
        password='testpass123',
        name='Other User',
    )


@pytest.fixture
def auth_headers(user):
    """Bearer header for ``user``."""
    return {'Authorization': f'Bearer {issue_token(user)}'}


@pytest.fixture
def mock_s3():
    """Mock S3 service with odin-vault bucket.

    Yields:
        boto3 S3 resource with odin-vault bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=TEST_BUCKET)

        yield conn


@pytest.fixture
def png_bytes():
    """An 800x600 PNG image."""
    buffer = BytesIO()
    Image.new('RGB', (800, 600), color=(200, 30, 30)).save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def make_file(db) -> Callable[..., File]:
    """Factory creating File rows without touching storage.

    Returns:
        Callable building a File with optional tags and trash state.
    """

    def factory(
        owner,
        original_name='notes.txt',
        mime_type='text/plain',
        tags=(),
        folder=None,
        deleted=False,
        size=100,
        **extra,
    ) -> File:
        file_instance = File.objects.create(
            owner=owner,
            name=original_name,
            original_name=original_name,
            size=size,
            mime_type=mime_type,
            storage_key=f'{owner.id}/files/{uuid.uuid4()}-{original_name}',
            folder=folder,
            is_deleted=deleted,
            deleted_at=timezone.now() if deleted else None,
            **extra,
        )
        FileTag.objects.bulk_create(
            FileTag(file=file_instance, name=tag) for tag in tags
        )
        return file_instance

    return factory
