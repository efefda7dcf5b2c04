"""Enum definitions for database models."""

from enum import StrEnum

from sqlalchemy import Enum as SaEnum


class SequenceName(StrEnum):
    """Names of the counters in the sequence_counters table."""

    REGISTRATION_NUMBER = "registration_number"
    APPLICATION_NUMBER = "application_number"


class ApplicationType(StrEnum):
    """Programme level a candidate applies for."""

    UG = "UG"
    PG = "PG"
    DIPLOMA = "Diploma"
    CERTIFICATE = "Certificate"
    PHD = "PhD"


class ApplicationStatus(StrEnum):
    """Status of a single programme application."""

    APPLIED = "Applied"
    UNDER_REVIEW = "Under Review"
    SELECTED = "Selected"
    NOT_SELECTED = "Not Selected"
    WAITLISTED = "Waitlisted"
    CANCELLED = "Cancelled"


class AdmissionStatus(StrEnum):
    """Overall admission status of a candidate.

    Status flow (roughly ordered):
        DRAFT -> APPLIED -> UNDER_REVIEW -> PROVISIONAL -> DOCUMENT_VERIFICATION
        -> FEE_PENDING -> ADMITTED

    REJECTED, CANCELLED, ON_HOLD and WAITLISTED can occur after APPLIED.
    """

    DRAFT = "Draft"
    APPLIED = "Applied"
    UNDER_REVIEW = "Under Review"
    PROVISIONAL = "Provisional"
    DOCUMENT_VERIFICATION = "Document Verification"
    FEE_PENDING = "Fee Pending"
    ADMITTED = "Admitted"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"
    ON_HOLD = "On Hold"
    WAITLISTED = "Waitlisted"


class PaymentStatus(StrEnum):
    """Status of the application fee payment."""

    PENDING = "pending"
    PARTIAL = "partial"
    SUCCESS = "success"
    REFUNDED = "refunded"


class Gender(StrEnum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    PREFER_NOT_TO_SAY = "Prefer not to say"


def str_enum_column(enum_class: type[StrEnum], name: str) -> SaEnum:
    """Column type storing enum *values* (not member names) as VARCHAR."""
    return SaEnum(
        enum_class,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda e: [member.value for member in e],
    )
