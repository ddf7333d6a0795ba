"""Shared exceptions for service layer operations."""


class StoreError(Exception):
    """
    Raised when the persistence store fails a bookmark operation.

    The original database error is chained as __cause__ and logged by the service.
    The message is safe to show to API callers.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class IdentityServiceError(Exception):
    """Raised when the identity service rejects or fails a request."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EmailAlreadyRegisteredError(IdentityServiceError):
    """Raised on signup when the email already has an account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already registered")
