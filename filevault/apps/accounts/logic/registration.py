"""Business logic for registration and login."""

import logging

from django.conf import settings
from django.contrib.auth import authenticate as django_authenticate
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from filevault.apps.accounts.exceptions import (
    AdminRegistrationDisabledError,
    DuplicateEmailError,
    InvalidCredentialsError,
)
from filevault.apps.accounts.logic.identity import Identity, identity_for_user
from filevault.apps.accounts.models import Role, User

logger = logging.getLogger(__name__)


def register(email: str, password: str, role: str | None = None) -> User:
    """Register a new user.

    The role is taken from the caller and defaults to ``user``. Whether a
    caller may pick ``admin`` is governed by the
    ``FILEVAULT_ALLOW_ADMIN_REGISTRATION`` setting.

    Email uniqueness is left to the database unique constraint. The
    insert runs in its own savepoint so a violation leaves any outer
    transaction usable.

    Args:
        email: Login email.
        password: Raw password, stored hashed.
        role: Requested role, ``user`` when omitted.

    Returns:
        Created User instance.

    Raises:
        ValidationError: If the email is empty or the role is unknown.
        AdminRegistrationDisabledError: If admin self-registration is off.
        DuplicateEmailError: If the email is already registered.
    """
    if not email:
        raise ValidationError('Email is required')

    role = role or Role.USER
    if role not in Role.values:
        raise ValidationError(f'Unknown role: {role}')

    if role == Role.ADMIN:
        if not settings.FILEVAULT_ALLOW_ADMIN_REGISTRATION:
            logger.warning('Rejected admin self-registration: %s', email)
            raise AdminRegistrationDisabledError(email)
        logger.warning('User self-registered with admin role: %s', email)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                role=role,
            )
    except IntegrityError as error:
        logger.info('Registration rejected, email taken: %s', email)
        raise DuplicateEmailError(email) from error

    logger.info('User registered: %s (ID: %d, role: %s)', email, user.pk, role)
    return user


def authenticate(email: str, password: str) -> Identity:
    """Check credentials and return the caller's identity.

    Args:
        email: Login email.
        password: Raw password.

    Returns:
        Identity of the authenticated user.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password
            does not match. Both cases are indistinguishable.
    """
    user = django_authenticate(username=email, password=password)
    if user is None:
        logger.warning('Authentication failed for: %s', email)
        raise InvalidCredentialsError

    logger.info('User authenticated: %s', email)
    return identity_for_user(user)
