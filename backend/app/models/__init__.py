"""Database models."""

from sqlmodel import SQLModel

from app.models.candidate import Application, Candidate
from app.models.enums import (
    AdmissionStatus,
    ApplicationStatus,
    ApplicationType,
    PaymentStatus,
    SequenceName,
)
from app.models.program import Program
from app.models.sequence_counter import SequenceCounter

__all__ = [
    "SQLModel",
    "Candidate",
    "Application",
    "Program",
    "SequenceCounter",
    "AdmissionStatus",
    "ApplicationStatus",
    "ApplicationType",
    "PaymentStatus",
    "SequenceName",
]
