"""Plain data for candidates that are about to be inserted."""

from dataclasses import dataclass, field
from datetime import date, datetime

from app.models.enums import ApplicationType, PaymentStatus


@dataclass
class NewApplication:
    application_number: int
    application_type: ApplicationType
    program_code: str
    program_name: str
    preference_order: int
    stream: str | None = None


@dataclass
class NewCandidate:
    """Everything needed to insert a candidate.

    registration_number is mutable: CandidateService.create_with_retry
    replaces it when the insert hits a duplicate.
    """

    registration_number: int
    academic_year: str
    full_name: str
    date_of_birth: date
    gender: str
    email: str
    phone: str
    programme_type: ApplicationType
    community: str | None = None
    nationality: str = "Indian"
    payment_amount: int = 0
    payment_status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: str | None = None
    payment_date: datetime | None = None
    payment_method: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    applications: list[NewApplication] = field(default_factory=list)
