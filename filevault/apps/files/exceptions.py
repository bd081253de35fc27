"""Exceptions for files app."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from filevault.apps.accounts.logic.identity import Actor
    from filevault.apps.files.logic.access_policy import Operation


class FileOperationError(Exception):
    """Base class for file registry failures."""


class RecordNotFoundError(FileOperationError):
    """Raised when no metadata record exists for a file id."""

    def __init__(self, file_id: int) -> None:
        """Initialize RecordNotFoundError.

        Args:
            file_id: Requested file id.
        """
        self.file_id = file_id
        super().__init__(f'File not found: ID={file_id}')


class BlobMissingError(FileOperationError):
    """Raised when a record exists but its bytes are gone.

    Distinct from RecordNotFoundError: metadata was found.
    """

    def __init__(self, file_id: int, storage_name: str) -> None:
        """Initialize BlobMissingError.

        Args:
            file_id: Id of the record.
            storage_name: Storage key that has no bytes.
        """
        self.file_id = file_id
        self.storage_name = storage_name
        super().__init__(
            f'File bytes missing from storage: ID={file_id}, '
            f'path={storage_name}',
        )


class AccessDeniedError(FileOperationError):
    """Raised when the access policy denies an operation."""

    def __init__(
        self,
        identity: 'Actor',
        operation: 'Operation',
        file_id: int | None = None,
    ) -> None:
        """Initialize AccessDeniedError.

        Args:
            identity: Identity that attempted the operation.
            operation: Denied operation.
            file_id: Target file id, if any.
        """
        self.identity = identity
        self.operation = operation
        self.file_id = file_id
        super().__init__(
            f'Access denied: {operation} by {identity!r}'
            + (f' on ID={file_id}' if file_id is not None else ''),
        )


class StorageWriteError(FileOperationError):
    """Raised when writing bytes to storage fails. No record is created."""

    def __init__(self, storage_name: str) -> None:
        """Initialize StorageWriteError.

        Args:
            storage_name: Storage key that could not be written.
        """
        self.storage_name = storage_name
        super().__init__(f'Failed to write file to storage: {storage_name}')


class StorageDeleteError(FileOperationError):
    """Raised when deleting bytes fails. The record is left intact."""

    def __init__(self, storage_name: str) -> None:
        """Initialize StorageDeleteError.

        Args:
            storage_name: Storage key that could not be deleted.
        """
        self.storage_name = storage_name
        super().__init__(f'Failed to delete file from storage: {storage_name}')
