"""Integration tests for the blob store against MinIO.

These tests need a reachable MinIO (``MINIO_ENDPOINT``) and check that
FileStorage behaves the way the file registry relies on.
Run with ``pytest -m integration``.
"""
import os
from typing import Final

import boto3
import pytest
from botocore.client import BaseClient
from botocore.exceptions import ClientError
from django.core.files.base import ContentFile

from filevault.apps.files.infrastructure.storage import FileStorage

_TEST_BUCKET: Final = 'filevault'
_TEST_FILE_KEY: Final = '1/20260101T000000000000-0a0b0c0d-test-file.txt'
_TEST_FILE_CONTENT: Final = b'Hello from MinIO integration test!'


@pytest.fixture
def minio_settings() -> dict[str, str]:
    """MinIO connection settings from the environment.

    Returns:
        Endpoint and credentials.
    """
    return {
        'endpoint_url': os.getenv('MINIO_ENDPOINT', 'http://minio:9000'),
        'access_key': os.getenv('MINIO_ROOT_USER', 'minioadmin'),
        'secret_key': os.getenv('MINIO_ROOT_PASSWORD', 'minioadmin'),
    }


@pytest.fixture
def s3_client(minio_settings: dict[str, str]) -> BaseClient:
    """Create S3 client for MinIO.

    Args:
        minio_settings: MinIO connection settings.

    Returns:
        Configured boto3 S3 client for MinIO.
    """
    return boto3.client(
        's3',
        endpoint_url=minio_settings['endpoint_url'],
        aws_access_key_id=minio_settings['access_key'],
        aws_secret_access_key=minio_settings['secret_key'],
        region_name='us-east-1',
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
def storage(minio_settings: dict[str, str], test_bucket: str) -> FileStorage:
    """Create FileStorage pointed at MinIO.

    Args:
        minio_settings: MinIO connection settings.
        test_bucket: Name of the test bucket.

    Returns:
        FileStorage instance.
    """
    return FileStorage(
        bucket_name=test_bucket,
        region_name='us-east-1',
        file_overwrite=False,
        default_acl=None,
        **minio_settings,
    )


@pytest.mark.integration
def test_s3_client_connection(s3_client: BaseClient) -> None:
    """Test that S3 client can connect to MinIO."""
    response = s3_client.list_buckets()
    assert 'Buckets' in response


@pytest.mark.integration
def test_storage_round_trip(
    storage: FileStorage,
    s3_client: BaseClient,
    test_bucket: str,
) -> None:
    """Test bytes written through FileStorage read back unchanged.

    Args:
        storage: FileStorage for MinIO.
        s3_client: boto3 S3 client.
        test_bucket: Name of the test bucket.
    """
    saved_name = storage.save(_TEST_FILE_KEY, ContentFile(_TEST_FILE_CONTENT))

    response = s3_client.get_object(Bucket=test_bucket, Key=saved_name)
    assert response['Body'].read() == _TEST_FILE_CONTENT

    with storage.open(saved_name, 'rb') as blob:
        assert blob.read() == _TEST_FILE_CONTENT

    storage.delete(saved_name)


@pytest.mark.integration
def test_open_missing_raises_file_not_found(storage: FileStorage) -> None:
    """Test opening a missing key raises FileNotFoundError.

    Args:
        storage: FileStorage for MinIO.
    """
    with pytest.raises(FileNotFoundError):
        storage.open('1/does-not-exist.txt', 'rb')


@pytest.mark.integration
def test_delete_missing_is_noop(
    storage: FileStorage,
    s3_client: BaseClient,
    test_bucket: str,
) -> None:
    """Test deleting an already deleted key succeeds.

    Args:
        storage: FileStorage for MinIO.
        s3_client: boto3 S3 client.
        test_bucket: Name of the test bucket.
    """
    saved_name = storage.save(_TEST_FILE_KEY, ContentFile(_TEST_FILE_CONTENT))

    storage.delete(saved_name)
    storage.delete(saved_name)

    with pytest.raises(ClientError) as exc_info:
        s3_client.head_object(Bucket=test_bucket, Key=saved_name)

    assert exc_info.value.response['Error']['Code'] == '404'
