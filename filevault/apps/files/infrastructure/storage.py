"""Blob storage backend for S3-compatible storage."""

import logging
from typing import Any, final, override

from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """S3 storage backend for uploaded file bytes.

    Extends django-storages S3Storage with logging around writes,
    reads and deletes. Deleting a key that does not exist is a no-op,
    which lets a delete retry finish after the bytes are already gone.
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to S3 with error handling and logging.

        Args:
            name: Storage key for the file.
            content: File content (file-like object).
            max_length: Optional maximum length for the filename.

        Returns:
            Actual storage key used (may differ from name if conflicts).

        Raises:
            Exception: If S3 upload fails.
        """
        try:
            logger.info('Uploading file to storage: %s', name)
            saved_name = super().save(name, content, max_length)
            logger.info('Successfully uploaded file: %s', saved_name)
        except Exception:
            logger.exception('Failed to upload file to storage: %s', name)
            raise
        else:
            return saved_name

    @override
    def _open(self, name: str, mode: str = 'rb') -> Any:
        """Open file from S3 with logging.

        Args:
            name: Storage key of file to open.
            mode: File mode.

        Returns:
            S3 file object.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        try:
            return super()._open(name, mode)
        except FileNotFoundError:
            logger.warning('File not found in storage: %s', name)
            raise

    @override
    def delete(self, name: str) -> None:
        """Delete file from S3 with error handling and logging.

        Args:
            name: Storage key of file to delete.

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
