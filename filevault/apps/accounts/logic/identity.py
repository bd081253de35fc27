"""Explicit caller identities for file operations."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, final, override

from django.http import HttpRequest

from filevault.apps.accounts.models import Role

if TYPE_CHECKING:
    from filevault.apps.accounts.models import User


@final
@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated caller: user id and role."""

    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        """Whether the identity holds the admin role."""
        return self.role == Role.ADMIN


@final
class AnonymousIdentity:
    """Caller with no authenticated user."""

    is_admin: Final = False

    @override
    def __repr__(self) -> str:
        """String representation."""
        return 'ANONYMOUS'


ANONYMOUS: Final = AnonymousIdentity()

Actor = Identity | AnonymousIdentity


def identity_for_user(user: 'User') -> Identity:
    """Build the identity of a stored user.

    Args:
        user: User instance.

    Returns:
        Identity carrying the user's id and role.
    """
    return Identity(user_id=user.pk, role=user.role)


def identity_from_request(request: HttpRequest) -> Actor:
    """Resolve the identity behind a request.

    Args:
        request: Request processed by AuthenticationMiddleware.

    Returns:
        Identity of the logged-in user, or ANONYMOUS.
    """
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return ANONYMOUS
    return identity_for_user(user)
