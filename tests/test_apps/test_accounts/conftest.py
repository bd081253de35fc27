"""Shared fixtures for accounts app tests."""

import pytest

from filevault.apps.accounts.logic.registration import register


@pytest.fixture
def registered_user(db):
    """Register a regular user.

    Returns:
        User instance with password 'testpass123'.
    """
    return register('alice@example.com', 'testpass123')
