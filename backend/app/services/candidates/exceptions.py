"""Candidate domain exceptions."""

from app.models.candidate import REGISTRATION_NUMBER_CONSTRAINT
from app.services.exceptions import (
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    ServiceError,
    ValidationError,
)


class CandidateNotFound(NotFoundError):
    """Candidate not found."""

    pass


class CandidateAlreadyRegistered(ConflictError):
    """A candidate with the same mobile number already exists."""

    pass


class DuplicateRegistrationNumber(DuplicateKeyError):
    """Registration number is already held by another candidate."""

    def __init__(self, registration_number: int):
        super().__init__(
            constraint=REGISTRATION_NUMBER_CONSTRAINT.name,  # type: ignore[arg-type]
            value=registration_number,
            message=f"Registration number {registration_number} is already taken",
        )


class InvalidSignup(ValidationError):
    """Signup request failed validation."""

    pass


class InvalidCredentials(ServiceError):
    """Registration number and mobile do not match a candidate."""

    pass


class PaymentFailed(ValidationError):
    """The payment for a signup did not go through."""

    pass
