"""Integration tests against a real S3-compatible service.

Run with MinIO from Docker Compose reachable at ``MINIO_ENDPOINT``.
They exercise what the mocked suite cannot: that pre-signed links
are actually honoured by the server and that conditional key checks
behave the same way on a real backend.
"""
import os
import uuid
from typing import Final

import boto3
import pytest
import requests
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import ClientError

_TEST_BUCKET: Final = os.getenv('AWS_STORAGE_BUCKET_NAME', 'odin-vault')
_TEST_FILE_CONTENT: Final = b'Hello from the storage integration test!'
_REQUEST_TIMEOUT: Final = 10


@pytest.fixture
def s3_client() -> BaseClient:
    """Create S3 client for MinIO.

    Returns:
        Configured boto3 S3 client for MinIO.
    """
    return boto3.client(
        's3',
        endpoint_url=os.getenv('MINIO_ENDPOINT', 'http://minio:9000'),
        aws_access_key_id=os.getenv('MINIO_ROOT_USER', 'minioadmin'),
        aws_secret_access_key=os.getenv('MINIO_ROOT_PASSWORD', 'minioadmin'),
        region_name='us-east-1',
        config=Config(signature_version='s3v4'),
    )


@pytest.fixture
def test_bucket(s3_client: BaseClient) -> str:
    """Ensure test bucket exists.

    Args:
        s3_client: boto3 S3 client.

    Returns:
        Name of the test bucket.
    """
    try:
        s3_client.head_bucket(Bucket=_TEST_BUCKET)
    except ClientError:
        s3_client.create_bucket(Bucket=_TEST_BUCKET)

    return _TEST_BUCKET


@pytest.fixture
def object_key(s3_client: BaseClient, test_bucket: str):
    """Per-test key under a throwaway owner prefix, removed afterwards."""
    key = f'{uuid.uuid4()}/files/integration.txt'
    yield key
    s3_client.delete_object(Bucket=test_bucket, Key=key)


@pytest.mark.integration
def test_head_bucket(s3_client: BaseClient, test_bucket: str) -> None:
    """Test the bucket used for health checks is reachable."""
    response = s3_client.head_bucket(Bucket=test_bucket)
    assert response['ResponseMetadata']['HTTPStatusCode'] == 200


@pytest.mark.integration
def test_presigned_download(
    s3_client: BaseClient,
    test_bucket: str,
    object_key: str,
) -> None:
    """Test a signed GET link serves the stored bytes without credentials."""
    s3_client.put_object(
        Bucket=test_bucket,
        Key=object_key,
        Body=_TEST_FILE_CONTENT,
        ContentType='text/plain',
    )

    url = s3_client.generate_presigned_url(
        'get_object',
        Params={'Bucket': test_bucket, 'Key': object_key},
        ExpiresIn=60,
    )
    response = requests.get(url, timeout=_REQUEST_TIMEOUT)

    assert response.status_code == 200
    assert response.content == _TEST_FILE_CONTENT


@pytest.mark.integration
def test_unsigned_download_is_refused(
    s3_client: BaseClient,
    test_bucket: str,
    object_key: str,
) -> None:
    """Test objects are private without a signature."""
    s3_client.put_object(Bucket=test_bucket, Key=object_key, Body=b'x')

    url = f'{s3_client.meta.endpoint_url}/{test_bucket}/{object_key}'
    response = requests.get(url, timeout=_REQUEST_TIMEOUT)

    assert response.status_code == 403


@pytest.mark.integration
def test_delete_missing_object_is_quiet(
    s3_client: BaseClient,
    test_bucket: str,
) -> None:
    """Test deleting an absent key succeeds, as purge relies on."""
    response = s3_client.delete_object(
        Bucket=test_bucket,
        Key=f'{uuid.uuid4()}/files/never-uploaded.txt',
    )

    assert response['ResponseMetadata']['HTTPStatusCode'] == 204


@pytest.mark.integration
def test_head_missing_object(s3_client: BaseClient, test_bucket: str) -> None:
    """Test existence checks see a 404 for free keys."""
    with pytest.raises(ClientError) as exc_info:
        s3_client.head_object(
            Bucket=test_bucket,
            Key=f'{uuid.uuid4()}/files/free.txt',
        )

    assert exc_info.value.response['Error']['Code'] == '404'
