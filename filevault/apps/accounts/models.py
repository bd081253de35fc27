"""Database models for accounts app."""

from typing import ClassVar, Final, final, override

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone

_ROLE_MAX_LENGTH: Final = 16


class Role(models.TextChoices):
    """Roles a user can hold. Fixed at registration."""

    USER = 'user', 'User'
    ADMIN = 'admin', 'Admin'


class UserManager(BaseUserManager):
    """Manager creating users keyed by email."""

    use_in_migrations = True

    def create_user(
        self,
        email: str,
        password: str | None = None,
        role: str = Role.USER,
        **extra_fields: object,
    ) -> 'User':
        """Create and save a user with a hashed password.

        Args:
            email: Login email, unique across users.
            password: Raw password, hashed before saving.
            role: User role.
            **extra_fields: Additional model fields.

        Returns:
            Created User instance.
        """
        if not email:
            raise ValueError('Users must have an email address')

        user = self.model(
            email=self.normalize_email(email),
            role=role,
            **extra_fields,
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    @override
    def get_by_natural_key(self, username: str | None) -> 'User':
        """Look up a user by email, normalized as on registration."""
        return super().get_by_natural_key(self.normalize_email(username))

    def create_superuser(
        self,
        email: str,
        password: str | None = None,
        **extra_fields: object,
    ) -> 'User':
        """Create an admin user (used by ``createsuperuser``)."""
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(
            email,
            password,
            role=Role.ADMIN,
            **extra_fields,
        )


@final
class User(AbstractBaseUser, PermissionsMixin):
    """Account that owns files.

    Email uniqueness is enforced by the database, not by a lookup
    before insert, so concurrent registrations cannot both succeed.
    """

    email = models.EmailField(unique=True)

    role = models.CharField(
        max_length=_ROLE_MAX_LENGTH,
        choices=Role.choices,
        default=Role.USER,
    )

    is_active = models.BooleanField(default=True)

    date_joined = models.DateTimeField(default=timezone.now)

    objects: ClassVar[UserManager] = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS: ClassVar[list[str]] = []

    class Meta:
        """Model metadata."""

        verbose_name = 'User'  # type: ignore[mutable-override]
        verbose_name_plural = 'Users'  # type: ignore[mutable-override]
        ordering = ['email']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.email} ({self.role})'

    @property
    def is_admin(self) -> bool:
        """Whether the user holds the admin role."""
        return self.role == Role.ADMIN

    @property
    def is_staff(self) -> bool:
        """Admins get access to the Django admin site."""
        return self.is_admin
