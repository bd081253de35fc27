"""Metadata extraction and storage naming utilities for files."""

import hashlib
import mimetypes
import secrets
from datetime import UTC, datetime
from pathlib import PurePosixPath
from typing import BinaryIO, Final

from django.core.exceptions import SuspiciousFileOperation, ValidationError
from django.utils.text import get_valid_filename

_CHUNK_SIZE: Final = 8192  # 8KB chunks for checksum calculation
_TOKEN_BYTES: Final = 4  # 8 hex chars
_MAX_NAME_LENGTH: Final = 100
_FALLBACK_NAME: Final = 'file'


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from filename extension.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return 'application/octet-stream'
    return mime_type


def calculate_checksum(file_obj: BinaryIO) -> str:
    """Calculate SHA256 checksum of file.

    Reads file in chunks to handle large files efficiently.
    Resets file pointer to beginning after calculation.

    Args:
        file_obj: File-like object to checksum.

    Returns:
        Hex-encoded SHA256 hash string.
    """
    sha256_hash = hashlib.sha256()

    file_obj.seek(0)
    for chunk in iter(lambda: file_obj.read(_CHUNK_SIZE), b''):
        sha256_hash.update(chunk)
    file_obj.seek(0)

    return sha256_hash.hexdigest()


def get_file_size(file_obj: BinaryIO) -> int:
    """Get file size from file object.

    Args:
        file_obj: File-like object.

    Returns:
        File size in bytes.
    """
    size = getattr(file_obj, 'size', None)
    if size is not None:
        return size
    file_size = len(file_obj.read())
    file_obj.seek(0)
    return file_size


def validate_display_name(display_name: str) -> None:
    """Validate the user-supplied filename.

    Args:
        display_name: Original filename.

    Raises:
        ValidationError: If the name is empty or too long.
    """
    if not display_name or not display_name.strip():
        raise ValidationError('Filename cannot be empty')
    if len(display_name) > 255:
        raise ValidationError('Filename cannot exceed 255 characters')


def _safe_filename(display_name: str) -> str:
    """Reduce a display name to a storage-safe filename.

    Directory components are dropped and unsafe characters replaced.
    Long names are shortened, keeping the extension.
    """
    name = PurePosixPath(display_name.replace('\\', '/')).name
    try:
        name = get_valid_filename(name)
    except SuspiciousFileOperation:
        return _FALLBACK_NAME

    if len(name) > _MAX_NAME_LENGTH:
        path = PurePosixPath(name)
        suffix = path.suffix[:_MAX_NAME_LENGTH // 2]
        name = path.stem[:_MAX_NAME_LENGTH - len(suffix)] + suffix
    return name


def generate_storage_name(owner_id: int, display_name: str) -> str:
    """Generate a fresh storage key for an upload.

    The key combines a microsecond UTC timestamp and a random token with
    the sanitized original name, so keys never repeat even after the
    previous file with the same name was deleted.

    Args:
        owner_id: Id of the uploading user.
        display_name: Original filename (e.g., 'report.pdf').

    Returns:
        Storage key (e.g., '1/20260131T143052123456-9f2c1a7b-report.pdf').
    """
    timestamp = datetime.now(tz=UTC).strftime('%Y%m%dT%H%M%S%f')
    token = secrets.token_hex(_TOKEN_BYTES)
    return f'{owner_id}/{timestamp}-{token}-{_safe_filename(display_name)}'


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'document.pdf').

    Returns:
        Extension without dot, lowercase (e.g., 'pdf').
        Returns empty string if no extension.
    """
    extension = PurePosixPath(filename).suffix
    return extension.lstrip('.').lower()
