"""Django admin configuration for accounts app."""

from typing import override

from django.contrib import admin
from django.http import HttpRequest

from filevault.apps.accounts.logic.identity import identity_from_request
from filevault.apps.accounts.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin[User]):
    """Admin interface for User model.

    Users are immutable once registered, so the admin only lists them.
    """

    list_display = [
        'email',
        'role',
        'is_active',
        'date_joined',
    ]

    list_filter = [
        'role',
        'is_active',
    ]

    search_fields = [
        'email',
    ]

    fields = [
        'email',
        'role',
        'is_active',
        'date_joined',
        'last_login',
    ]

    readonly_fields = fields

    @override
    def has_module_permission(self, request: HttpRequest) -> bool:
        """Only admins see the users section."""
        return identity_from_request(request).is_admin

    @override
    def has_view_permission(
        self,
        request: HttpRequest,
        obj: User | None = None,
    ) -> bool:
        """Only admins may browse users."""
        return identity_from_request(request).is_admin

    @override
    def has_add_permission(self, request: HttpRequest) -> bool:
        """Disable adding users via admin.

        Users are created through registration.

        Args:
            request: HTTP request.

        Returns:
            False - users cannot be added manually.
        """
        return False

    @override
    def has_delete_permission(
        self,
        request: HttpRequest,
        obj: User | None = None,
    ) -> bool:
        """Disable deleting users via admin.

        Args:
            request: HTTP request.
            obj: Optional User instance.

        Returns:
            False - users are never deleted.
        """
        return False
