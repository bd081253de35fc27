"""Exceptions for accounts app."""


class DuplicateEmailError(Exception):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str) -> None:
        """Initialize DuplicateEmailError.

        Args:
            email: The email that was already registered.
        """
        self.email = email
        super().__init__(f'Email already registered: {email}')


class InvalidCredentialsError(Exception):
    """Raised when login fails.

    Unknown email and wrong password raise the same error with the
    same message, so callers cannot probe which accounts exist.
    """

    def __init__(self) -> None:
        """Initialize InvalidCredentialsError."""
        super().__init__('Invalid email or password')


class AdminRegistrationDisabledError(Exception):
    """Raised when self-registration as admin is turned off."""

    def __init__(self, email: str) -> None:
        """Initialize AdminRegistrationDisabledError.

        Args:
            email: Email of the rejected registration.
        """
        self.email = email
        super().__init__(
            f'Registration with admin role is disabled: {email}',
        )
