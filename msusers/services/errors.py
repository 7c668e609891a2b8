"""Errors raised by the user services.

Every error carries a stable ``code`` (the class name) so the HTTP layer
and metrics can label failures without string matching on messages.
"""

from __future__ import annotations


class UserServiceError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        return type(self).__name__


class UserValidationError(UserServiceError, ValueError):
    pass


class InvalidUserData(UserValidationError):
    def __init__(self, message: str = "Invalid user data", errors=None) -> None:
        super().__init__(message)
        self.errors = errors or []


class InvalidNameLength(UserValidationError):
    def __init__(self, field: str, min_length: int) -> None:
        super().__init__(f"The field '{field}' must have at least {min_length} characters.")
        self.field = field


class InvalidPasswordLength(UserValidationError):
    pass


class InvalidCpfFormat(UserValidationError):
    pass


class InvalidActiveValue(UserValidationError):
    pass


class UserConflictError(UserServiceError):
    pass


class DuplicateCpf(UserConflictError):
    def __init__(
        self, message: str = "Duplicate CPF. A user with the same CPF already exists."
    ) -> None:
        super().__init__(message)


class DuplicateEmail(UserConflictError):
    def __init__(
        self,
        message: str = "Duplicate email. A user with the same email already exists.",
    ) -> None:
        super().__init__(message)


class AuthenticationFailed(UserServiceError):
    def __init__(self, message: str = "User not found or wrong password") -> None:
        super().__init__(message)
