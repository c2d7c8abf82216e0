class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ReferentialIntegrityError(DomainError):
    """Raised when deleting a record that an event still references."""


class NotFoundError(DomainError):
    """Raised when a record id does not exist in its collection."""
