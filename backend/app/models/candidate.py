"""Candidate and Application database models."""

from datetime import UTC, date, datetime

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from app.models.enums import (
    AdmissionStatus,
    ApplicationStatus,
    ApplicationType,
    PaymentStatus,
    str_enum_column,
)
from app.models.types import ULIDType, new_ulid


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


# Named so duplicate-key failures on it can be told apart from other conflicts
REGISTRATION_NUMBER_CONSTRAINT = UniqueConstraint(
    "registration_number", name="uq_candidates_registration_number"
)


class Candidate(SQLModel, table=True):
    """Admission candidate with their registration number."""

    __tablename__ = "candidates"
    __table_args__ = (REGISTRATION_NUMBER_CONSTRAINT,)

    # ULID stored as UUID
    id: str = Field(
        default_factory=new_ulid,
        max_length=26,
        sa_column=Column(ULIDType, primary_key=True),
    )
    registration_number: int = Field(sa_column=Column(BigInteger, nullable=False))
    academic_year: str
    admission_status: AdmissionStatus = Field(
        default=AdmissionStatus.APPLIED,
        sa_column=Column(str_enum_column(AdmissionStatus, "admissionstatus"), nullable=False),
    )

    # Personal details
    full_name: str
    date_of_birth: date
    gender: str
    email: str
    phone: str = Field(index=True)
    nationality: str = "Indian"
    community: str | None = None

    programme_type: ApplicationType = Field(
        sa_column=Column(str_enum_column(ApplicationType, "applicationtype"), nullable=False),
    )

    # Payment
    payment_amount: int = 0  # rupees
    payment_status: PaymentStatus = Field(
        default=PaymentStatus.PENDING,
        sa_column=Column(str_enum_column(PaymentStatus, "paymentstatus"), nullable=False),
    )
    transaction_id: str | None = None
    payment_date: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=True)))
    payment_method: str | None = None

    # Request metadata
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    applications: list["Application"] = Relationship(
        back_populates="candidate",
        sa_relationship_kwargs={"order_by": "Application.preference_order"},
    )


# One application per preference slot
APPLICATION_PREFERENCE_CONSTRAINT = UniqueConstraint(
    "candidate_id", "preference_order", name="uq_applications_candidate_preference"
)


class Application(SQLModel, table=True):
    """One programme preference of a candidate, with its application number."""

    __tablename__ = "applications"
    __table_args__ = (APPLICATION_PREFERENCE_CONSTRAINT,)

    id: int | None = Field(default=None, primary_key=True)
    candidate_id: str = Field(
        sa_column=Column(ULIDType, ForeignKey("candidates.id"), index=True, nullable=False),
    )
    application_number: int = Field(sa_column=Column(BigInteger, unique=True, nullable=False))
    application_type: ApplicationType = Field(
        sa_column=Column(str_enum_column(ApplicationType, "applicationtype"), nullable=False),
    )
    program_code: str = Field(index=True)
    program_name: str
    stream: str | None = None  # "Aided" or "Self Financed"
    status: ApplicationStatus = Field(
        default=ApplicationStatus.APPLIED,
        sa_column=Column(str_enum_column(ApplicationStatus, "applicationstatus"), nullable=False),
    )
    shift: str | None = None
    preference_order: int  # 1-based, matches position in the signup request

    # Relationships
    candidate: Candidate = Relationship(back_populates="applications")
