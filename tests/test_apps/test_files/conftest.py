"""Shared fixtures for files app tests."""

import boto3
import pytest
from django.contrib.auth import get_user_model
from moto import mock_aws

from filevault.apps.accounts.logic.identity import identity_for_user
from filevault.apps.accounts.models import Role

User = get_user_model()

BUCKET_NAME = 'filevault'


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        email='owner@example.com',
        password='testpass123',
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
    )


@pytest.fixture
def admin_user(db):
    """Create user with the admin role.

    Returns:
        Admin user instance.
    """
    return User.objects.create_user(
        email='admin@example.com',
        password='testpass123',
        role=Role.ADMIN,
    )


@pytest.fixture
def identity(user):
    """Identity of the test user."""
    return identity_for_user(user)


@pytest.fixture
def other_identity(other_user):
    """Identity of the second test user."""
    return identity_for_user(other_user)


@pytest.fixture
def admin_identity(admin_user):
    """Identity of the admin user."""
    return identity_for_user(admin_user)


@pytest.fixture
def mock_s3():
    """Mock S3 service with filevault bucket.

    Yields:
        boto3 S3 resource with filevault bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=BUCKET_NAME)
        yield conn


@pytest.fixture
def bucket(mock_s3):
    """Mocked filevault bucket.

    Returns:
        boto3 Bucket resource.
    """
    return mock_s3.Bucket(BUCKET_NAME)


@pytest.fixture
def pdf_bytes():
    """Header bytes of a PDF file.

    Returns:
        Four bytes: %PDF.
    """
    return bytes([0x25, 0x50, 0x44, 0x46])
