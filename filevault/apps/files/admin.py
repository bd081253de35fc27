"""Django admin configuration for files app."""

from typing import override

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from filevault.apps.accounts.logic.identity import identity_from_request
from filevault.apps.files.logic.file_operations import delete_file
from filevault.apps.files.models import FileRecord


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < 1024:
        return f'{size_bytes} B'
    if size_bytes < 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / 1024:.1f} KB'
    if size_bytes < 1024 * 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / (1024 * 1024):.1f} MB'
    return f'{size_bytes / (1024 * 1024 * 1024):.1f} GB'


@admin.register(FileRecord)
class FileRecordAdmin(admin.ModelAdmin[FileRecord]):
    """Admin interface for FileRecord model.

    Lists every user's files. Records are read-only here; deleting one
    goes through the file registry so its bytes are removed first.
    """

    list_display = [
        'display_name',
        'owner_email',
        'size_display',
        'mime_type',
        'uploaded_at',
    ]

    list_filter = [
        'mime_type',
        'uploaded_at',
    ]

    search_fields = [
        'display_name',
        'owner__email',
        'checksum_sha256',
    ]

    readonly_fields = [
        'owner',
        'display_name',
        'storage_name',
        'size_bytes',
        'mime_type',
        'checksum_sha256',
        'uploaded_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('display_name', 'owner'),
        }),
        ('Storage', {
            'fields': (
                'storage_name',
                'size_bytes',
                'mime_type',
                'checksum_sha256',
            ),
        }),
        ('Timestamps', {
            'fields': ('uploaded_at',),
        }),
    )

    def owner_email(self, obj: FileRecord) -> str:
        """Display email of the file owner.

        Args:
            obj: FileRecord instance.

        Returns:
            Owner email.
        """
        return obj.owner.email
    owner_email.short_description = 'Owner'  # type: ignore[attr-defined]

    def size_display(self, obj: FileRecord) -> str:
        """Display file size in human-readable format.

        Args:
            obj: FileRecord instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[FileRecord]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('owner')

    @override
    def has_module_permission(self, request: HttpRequest) -> bool:
        """Only admins see the files section."""
        return identity_from_request(request).is_admin

    @override
    def has_view_permission(
        self,
        request: HttpRequest,
        obj: FileRecord | None = None,
    ) -> bool:
        """Only admins may browse all files."""
        return identity_from_request(request).is_admin

    @override
    def has_add_permission(self, request: HttpRequest) -> bool:
        """Disable adding records via admin.

        Records are created by uploads only.

        Args:
            request: HTTP request.

        Returns:
            False - records cannot be added manually.
        """
        return False

    @override
    def has_change_permission(
        self,
        request: HttpRequest,
        obj: FileRecord | None = None,
    ) -> bool:
        """Disable editing records via admin.

        Args:
            request: HTTP request.
            obj: Optional FileRecord instance.

        Returns:
            False - records are immutable.
        """
        return False

    @override
    def has_delete_permission(
        self,
        request: HttpRequest,
        obj: FileRecord | None = None,
    ) -> bool:
        """Only admins may delete files from the admin."""
        return identity_from_request(request).is_admin

    @override
    def delete_model(self, request: HttpRequest, obj: FileRecord) -> None:
        """Delete bytes and record through the file registry.

        Args:
            request: HTTP request.
            obj: FileRecord instance to delete.
        """
        delete_file(identity_from_request(request), obj.pk)

    @override
    def delete_queryset(
        self,
        request: HttpRequest,
        queryset: QuerySet[FileRecord],
    ) -> None:
        """Delete selected files one by one through the file registry.

        Args:
            request: HTTP request.
            queryset: Selected FileRecord instances.
        """
        identity = identity_from_request(request)
        for file_id in list(queryset.values_list('pk', flat=True)):
            delete_file(identity, file_id)
