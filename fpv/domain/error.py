"""Domain layer errors."""

from fpv.domain.value.types import FieldError


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Raised when input fields violate post or user rules.

    Carries every violation found, not just the first one.
    """

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__(
            "; ".join(f"{error.field}: {error.message}" for error in errors)
        )


class AuthenticationError(DomainError):
    """Raised when a bearer credential is missing, invalid or expired."""

    pass


class AuthorizationError(DomainError):
    """Raised when a user attempts to change content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str, message: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write would violate a uniqueness rule."""

    pass


class StorageError(DomainError):
    """Raised when the database is unreachable or a statement fails."""

    pass
