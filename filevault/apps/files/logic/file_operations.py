"""Business logic for file operations.

Every operation takes an explicit caller identity and runs the access
policy against a freshly loaded record before touching storage.
Metadata (database) and bytes (blob storage) are two stores with no
shared transaction, so the order of steps is fixed:

- upload writes bytes first, then inserts the record
- delete removes bytes first, then deletes the record

A record whose bytes are gone (delete interrupted after the blob step)
is reported as BlobMissingError on download and is removed by a
later delete.
"""

import logging
from typing import TYPE_CHECKING, BinaryIO

from django.core.files.base import ContentFile
from django.core.files.base import File as DjangoFile
from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import QuerySet

from filevault.apps.accounts.logic.identity import Actor
from filevault.apps.accounts.models import User
from filevault.apps.files.exceptions import (
    AccessDeniedError,
    BlobMissingError,
    RecordNotFoundError,
    StorageDeleteError,
    StorageWriteError,
)
from filevault.apps.files.infrastructure.metadata import (
    calculate_checksum,
    detect_mime_type,
    generate_storage_name,
    get_file_size,
    validate_display_name,
)
from filevault.apps.files.logic.access_policy import Operation, check
from filevault.apps.files.models import FileRecord

if TYPE_CHECKING:
    from filevault.apps.files.infrastructure.storage import FileStorage

logger = logging.getLogger(__name__)


def _get_storage() -> 'FileStorage':
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def _load_record(file_id: int) -> FileRecord:
    """Load a record by id.

    Args:
        file_id: Record id.

    Returns:
        FileRecord instance.

    Raises:
        RecordNotFoundError: If no record exists.
    """
    try:
        return FileRecord.objects.get(pk=file_id)
    except FileRecord.DoesNotExist as error:
        logger.info('File not found: ID=%d', file_id)
        raise RecordNotFoundError(file_id) from error


def list_files(identity: Actor) -> QuerySet[FileRecord]:
    """List files visible to the identity.

    Admins see every record, with the owner joined for display.
    Other users see only their own records.

    Args:
        identity: Caller identity.

    Returns:
        QuerySet of FileRecord objects.

    Raises:
        AccessDeniedError: If the identity is anonymous.
    """
    check(identity, None, Operation.LIST)

    if identity.is_admin:
        logger.debug('Listing all files for admin %r', identity)
        return FileRecord.objects.select_related('owner')

    logger.debug('Listing files owned by user %d', identity.user_id)
    return FileRecord.objects.filter(owner_id=identity.user_id)


def upload_file(
    identity: Actor,
    display_name: str,
    content: bytes | BinaryIO | DjangoFile,
) -> FileRecord:
    """Upload file to storage and create its record.

    Bytes are written before the record is inserted. If the write
    fails, no record exists. If the insert fails, the written bytes
    stay in storage as an orphan and the database error propagates.

    Args:
        identity: Caller identity, becomes the owner.
        display_name: Original filename, shown to users.
        content: File bytes or a file-like object.

    Returns:
        Created FileRecord instance.

    Raises:
        AccessDeniedError: If the identity is anonymous or has no user.
        ValidationError: If the display name is invalid.
        StorageWriteError: If writing the bytes fails.
    """
    check(identity, None, Operation.UPLOAD)
    validate_display_name(display_name)

    # Owner must exist before any byte is written
    try:
        owner = User.objects.get(pk=identity.user_id)
    except User.DoesNotExist as error:
        logger.warning('Upload by unknown user: ID=%d', identity.user_id)
        raise AccessDeniedError(identity, Operation.UPLOAD) from error

    if isinstance(content, bytes):
        content = ContentFile(content, name=display_name)

    logger.info('Calculating metadata for file: %s', display_name)
    checksum = calculate_checksum(content)
    mime_type = detect_mime_type(display_name)
    file_size = get_file_size(content)

    storage_name = generate_storage_name(owner.pk, display_name)
    storage = _get_storage()

    # Step 1: Write bytes
    try:
        saved_name = storage.save(storage_name, content)
    except Exception as error:
        logger.exception('Failed to write file to storage: %s', storage_name)
        raise StorageWriteError(storage_name) from error

    # Step 2: Create database record
    try:
        with transaction.atomic():
            record = FileRecord.objects.create(
                owner=owner,
                display_name=display_name,
                storage_name=saved_name,  # Use actual saved name from storage
                size_bytes=file_size,
                mime_type=mime_type,
                checksum_sha256=checksum,
            )
    except Exception:
        logger.exception(
            'Database insert failed, file left orphaned in storage: %s',
            saved_name,
        )
        raise

    logger.info(
        'File uploaded: %s -> %s (ID: %d, owner: %d)',
        display_name,
        saved_name,
        record.pk,
        owner.pk,
    )
    return record


def get_file(identity: Actor, file_id: int) -> FileRecord:
    """Get a record the identity may download.

    Args:
        identity: Caller identity.
        file_id: Record id.

    Returns:
        FileRecord instance.

    Raises:
        RecordNotFoundError: If no record exists.
        AccessDeniedError: If the policy denies the download.
    """
    record = _load_record(file_id)
    check(identity, record, Operation.DOWNLOAD)
    return record


def download_file(identity: Actor, file_id: int) -> DjangoFile:
    """Open the stored bytes of a file.

    The caller is responsible for closing the returned file.

    Args:
        identity: Caller identity.
        file_id: Record id.

    Returns:
        Binary file opened for reading.

    Raises:
        RecordNotFoundError: If no record exists.
        AccessDeniedError: If the policy denies the download.
        BlobMissingError: If the record exists but its bytes do not.
    """
    record = get_file(identity, file_id)

    try:
        blob = _get_storage().open(record.storage_name, 'rb')
    except FileNotFoundError as error:
        logger.warning(
            'File bytes missing for record: ID=%d, path=%s',
            record.pk,
            record.storage_name,
        )
        raise BlobMissingError(record.pk, record.storage_name) from error

    logger.info('File downloaded: ID=%d by %r', record.pk, identity)
    return blob


def delete_file(identity: Actor, file_id: int) -> None:
    """Delete file bytes and record.

    Bytes are removed first. If that fails the record is kept and
    StorageDeleteError is raised. Bytes that are already gone count as
    deleted, so a retry after an interrupted delete removes the
    leftover record. Of two concurrent deletes, the one that finds the
    record already removed raises RecordNotFoundError.

    Args:
        identity: Caller identity.
        file_id: Record id.

    Raises:
        RecordNotFoundError: If no record exists.
        AccessDeniedError: If the policy denies the delete.
        StorageDeleteError: If deleting the bytes fails.
    """
    record = _load_record(file_id)
    check(identity, record, Operation.DELETE)

    storage_name = record.storage_name
    logger.info('Deleting file: ID=%d, path=%s', file_id, storage_name)

    # Step 1: Delete bytes
    try:
        _get_storage().delete(storage_name)
    except Exception as error:
        logger.exception(
            'Failed to delete file from storage, record kept: ID=%d',
            file_id,
        )
        raise StorageDeleteError(storage_name) from error

    # Step 2: Delete record
    try:
        with transaction.atomic():
            deleted_count, _ = FileRecord.objects.filter(pk=file_id).delete()
    except Exception:
        logger.exception(
            'Failed to delete record after storage delete (orphaned): ID=%d',
            file_id,
        )
        raise

    if deleted_count == 0:
        logger.info('File already deleted by another request: ID=%d', file_id)
        raise RecordNotFoundError(file_id)

    logger.info('File deleted: ID=%d by %r', file_id, identity)


def find_orphaned_records(
    records: QuerySet[FileRecord] | None = None,
) -> list[FileRecord]:
    """Find records whose bytes are missing from storage.

    Read-only: records are reported, never removed.

    Args:
        records: Records to check, all records when None.

    Returns:
        List of records without bytes.
    """
    if records is None:
        records = FileRecord.objects.all()

    storage = _get_storage()
    orphaned = [
        record
        for record in records.iterator()
        if not storage.exists(record.storage_name)
    ]

    logger.info('Found %d records without stored bytes', len(orphaned))
    return orphaned
