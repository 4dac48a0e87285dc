"""Domain-level exceptions.

Services raise these errors to express business rule violations.
The API layer maps them to HTTP status codes (see api.error_handlers).
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist (or is not visible to the caller)."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationError(DomainError):
    """Caller could not be identified: missing token or bad credentials."""


class PermissionDeniedError(DomainError):
    """Caller presented a rejected token or lacks the required role."""


class RepositoryError(DomainError):
    """The backing store failed to complete an operation."""
