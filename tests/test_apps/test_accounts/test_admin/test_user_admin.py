"""Tests for User admin."""

import pytest
from django.contrib.admin.sites import AdminSite
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory

from filevault.apps.accounts.admin import UserAdmin
from filevault.apps.accounts.logic.registration import register
from filevault.apps.accounts.models import User


@pytest.fixture
def model_admin():
    """Create UserAdmin instance.

    Returns:
        UserAdmin bound to a fresh admin site.
    """
    return UserAdmin(User, AdminSite())


def _request(user):
    request = RequestFactory().get('/admin/accounts/user/')
    request.user = user
    return request


@pytest.mark.django_db
class TestUserAdmin:
    """Tests for UserAdmin."""

    def test_registered_admin_can_view_users(self, model_admin):
        """Test a role-based admin sees users without model permissions."""
        admin_user = register('root@example.com', 'secret-pass', role='admin')
        request = _request(admin_user)

        assert not admin_user.is_superuser
        assert not admin_user.has_perm('accounts.view_user')
        assert model_admin.has_module_permission(request)
        assert model_admin.has_view_permission(request)
        assert model_admin.has_view_permission(request, admin_user)

    def test_users_immutable_for_admins(self, model_admin):
        """Test admins cannot add or delete users."""
        admin_user = register('root@example.com', 'secret-pass', role='admin')
        request = _request(admin_user)

        assert not model_admin.has_add_permission(request)
        assert not model_admin.has_delete_permission(request)

    def test_regular_user_denied(self, model_admin, registered_user):
        """Test regular users do not see the users section."""
        request = _request(registered_user)

        assert not model_admin.has_module_permission(request)
        assert not model_admin.has_view_permission(request)

    def test_anonymous_denied(self, model_admin):
        """Test anonymous requests get no access."""
        request = _request(AnonymousUser())

        assert not model_admin.has_module_permission(request)
        assert not model_admin.has_view_permission(request)
