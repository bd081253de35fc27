"""Tests for FileRecord model."""

import pytest
from django.db import IntegrityError
from django.db.models import ProtectedError

from filevault.apps.files.models import FileRecord


def _create_record(user, storage_name='1/20260101T000000000000-0a0b0c0d-test.txt'):
    return FileRecord.objects.create(
        owner=user,
        display_name='test.txt',
        storage_name=storage_name,
        size_bytes=100,
        mime_type='text/plain',
        checksum_sha256='abcd' * 16,
    )


@pytest.mark.django_db
def test_file_record_str(user):
    """Test FileRecord __str__ method."""
    record = _create_record(user)

    assert str(record) == f'{user.id}:test.txt'


def test_file_record_get_extension():
    """Test get_extension returns lowercase extension of display name."""
    record = FileRecord(display_name='Scan.PDF')

    assert record.get_extension() == 'pdf'


@pytest.mark.django_db
def test_storage_name_unique(user):
    """Test two records cannot share a storage name."""
    _create_record(user)

    with pytest.raises(IntegrityError):
        _create_record(user)


@pytest.mark.django_db
def test_owner_delete_protected(user):
    """Test users with files cannot be deleted out from under them."""
    _create_record(user)

    with pytest.raises(ProtectedError):
        user.delete()

    assert FileRecord.objects.count() == 1
