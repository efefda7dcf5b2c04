"""Base service exceptions.

These exceptions are raised by the service layer and should be caught
by the API layer and converted to appropriate HTTP responses.
"""


class ServiceError(Exception):
    """Base service exception."""

    pass


class NotFoundError(ServiceError):
    """Resource not found."""

    pass


class ValidationError(ServiceError):
    """Validation error."""

    pass


class ConflictError(ServiceError):
    """Resource conflicts with an existing one."""

    pass


class DuplicateKeyError(ConflictError):
    """Insert rejected by a unique constraint.

    Carries the constraint name and the rejected value so callers can decide
    whether the conflict is one they know how to resolve.
    """

    def __init__(self, constraint: str, value: object, message: str | None = None):
        self.constraint = constraint
        self.value = value
        super().__init__(message or f"Duplicate value {value!r} for constraint {constraint}")


class StoreUnavailable(ServiceError):
    """The durable store could not be reached or the operation could not run."""

    pass
