"""Database models for files app."""

from typing import Final, final, override

from django.conf import settings
from django.db import models

from filevault.apps.files.infrastructure.metadata import get_file_extension

# Constants for field max lengths
_DISPLAY_NAME_MAX_LENGTH: Final = 255
_STORAGE_NAME_MAX_LENGTH: Final = 512
_MIME_TYPE_MAX_LENGTH: Final = 255
_CHECKSUM_MAX_LENGTH: Final = 64  # SHA256 hex length


@final
class FileRecord(models.Model):
    """Metadata of an uploaded file.

    The record belongs to the file registry; the blob store only holds
    the bytes under ``storage_name``. Records are removed exclusively
    through ``delete_file``, which removes the bytes first.
    """

    # Owner relationship. PROTECT keeps records from vanishing
    # without their bytes being removed.
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='files',
        db_index=True,
    )

    display_name = models.CharField(
        max_length=_DISPLAY_NAME_MAX_LENGTH,
        help_text='Original filename supplied by the uploader',
    )

    storage_name = models.CharField(
        max_length=_STORAGE_NAME_MAX_LENGTH,
        unique=True,
        help_text='Key in blob storage: {owner_id}/{timestamp}-{token}-{name}',
    )

    # File metadata (cached at upload)
    size_bytes = models.BigIntegerField(
        help_text='File size in bytes',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        help_text='MIME type guessed from the display name',
    )

    checksum_sha256 = models.CharField(
        max_length=_CHECKSUM_MAX_LENGTH,
        help_text='SHA256 hash for integrity verification',
    )

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-uploaded_at']

        indexes = [
            # Optimize per-owner listing
            models.Index(
                fields=['owner', '-uploaded_at'],
                name='files_owner_recent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner_id}:{self.display_name}'

    def get_extension(self) -> str:
        """Extract extension of the display name.

        Example: 'report.PDF' -> 'pdf'

        Returns:
            Extension without dot (lowercase).
        """
        return get_file_extension(self.display_name)
