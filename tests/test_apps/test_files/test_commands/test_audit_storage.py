"""Tests for audit_storage management command."""

from io import StringIO

import pytest
from django.core.management import call_command

from filevault.apps.files.logic.file_operations import upload_file
from filevault.apps.files.models import FileRecord


@pytest.mark.django_db
class TestAuditStorageCommand:
    """Tests for audit_storage management command."""

    def test_reports_records_without_bytes(self, identity, bucket):
        """Test records whose bytes are gone are listed."""
        upload_file(identity, 'kept.txt', b'kept')
        lost = upload_file(identity, 'lost.txt', b'lost')
        bucket.Object(lost.storage_name).delete()

        out = StringIO()
        call_command('audit_storage', stdout=out)

        output = out.getvalue()
        assert 'Checking 2 file records' in output
        assert f'Missing bytes: ID={lost.pk} lost.txt' in output
        assert 'kept.txt' not in output
        assert 'Found 1 records with missing bytes' in output

    def test_does_not_modify_records(self, identity, bucket):
        """Test the audit only reports."""
        lost = upload_file(identity, 'lost.txt', b'lost')
        bucket.Object(lost.storage_name).delete()

        call_command('audit_storage', stdout=StringIO())

        assert FileRecord.objects.filter(pk=lost.pk).exists()

    def test_all_present(self, identity, bucket):
        """Test success message when nothing is missing."""
        upload_file(identity, 'kept.txt', b'kept')

        out = StringIO()
        call_command('audit_storage', stdout=out)

        assert 'All file records have stored bytes' in out.getvalue()

    def test_owner_filter(self, identity, other_identity, bucket):
        """Test --owner limits the audit to one user's files."""
        mine = upload_file(identity, 'mine.txt', b'mine')
        theirs = upload_file(other_identity, 'theirs.txt', b'theirs')
        bucket.Object(mine.storage_name).delete()
        bucket.Object(theirs.storage_name).delete()

        out = StringIO()
        call_command('audit_storage', '--owner', 'other@example.com', stdout=out)

        output = out.getvalue()
        assert 'Checking 1 file records' in output
        assert 'theirs.txt' in output
        assert 'mine.txt' not in output

    def test_batch_size(self, identity, bucket):
        """Test --batch-size caps the number of checked records."""
        for index in range(3):
            upload_file(identity, f'file{index}.txt', b'data')

        out = StringIO()
        call_command('audit_storage', '--batch-size', '2', stdout=out)

        assert 'Checking 2 file records' in out.getvalue()
