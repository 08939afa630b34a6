"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
FORBIDDEN = "FORBIDDEN"
PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when attempting to create or update a resource that would violate a uniqueness constraint."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or input validation fail (e.g. blank, too long or reserved role names)."""

    pass


class ForbiddenError(DomainError):
    """Raised when a protected resource (such as a system role) would be modified."""

    pass


class PersistenceError(DomainError):
    """Raised when the backing store fails unexpectedly."""

    pass
