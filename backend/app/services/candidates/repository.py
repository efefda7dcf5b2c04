"""Candidate persistence."""

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.models.candidate import REGISTRATION_NUMBER_CONSTRAINT, Application, Candidate
from app.models.utils.integrity import describe_unique_violation, is_unique_violation
from app.services.candidates.candidate_data import NewCandidate
from app.services.candidates.exceptions import DuplicateRegistrationNumber
from app.services.exceptions import DuplicateKeyError

logger = structlog.get_logger(__name__)


class CandidateRepository:
    """Inserts and looks up candidate records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, data: NewCandidate) -> Candidate:
        """Insert a candidate with its applications in one transaction.

        A failed insert is rolled back completely, so nothing is left behind
        and the session can be reused for another attempt.

        Raises:
            DuplicateRegistrationNumber: registration_number is already taken.
            DuplicateKeyError: Any other unique constraint was violated.
            IntegrityError: Any other constraint violation.
        """
        candidate = Candidate(
            registration_number=data.registration_number,
            academic_year=data.academic_year,
            full_name=data.full_name,
            date_of_birth=data.date_of_birth,
            gender=data.gender,
            email=data.email.lower(),
            phone=data.phone,
            nationality=data.nationality,
            community=data.community,
            programme_type=data.programme_type,
            payment_amount=data.payment_amount,
            payment_status=data.payment_status,
            transaction_id=data.transaction_id,
            payment_date=data.payment_date,
            payment_method=data.payment_method,
            ip_address=data.ip_address,
            user_agent=data.user_agent,
            applications=[
                Application(
                    application_number=app.application_number,
                    application_type=app.application_type,
                    program_code=app.program_code,
                    program_name=app.program_name,
                    stream=app.stream,
                    preference_order=app.preference_order,
                )
                for app in data.applications
            ],
        )
        self.session.add(candidate)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e, REGISTRATION_NUMBER_CONSTRAINT):
                raise DuplicateRegistrationNumber(data.registration_number) from e
            violation = describe_unique_violation(e)
            if violation is not None:
                logger.warning(
                    "Unique constraint violated on candidate insert",
                    field=violation.field,
                    value=violation.value,
                    registration_number=data.registration_number,
                )
                raise DuplicateKeyError(
                    constraint=violation.field,
                    value=violation.value,
                    message=_duplicate_message(violation.field, violation.value),
                ) from e
            raise

        logger.debug("Inserted candidate", candidate_id=candidate.id, registration_number=candidate.registration_number)
        return candidate

    async def find_by_phone(self, phone: str) -> Candidate | None:
        result = await self.session.execute(select(Candidate).where(Candidate.phone == phone))
        return result.scalars().first()

    async def find_by_registration_number(self, registration_number: int) -> Candidate | None:
        statement = (
            select(Candidate)
            .options(selectinload(Candidate.applications))  # type: ignore[arg-type]
            .where(Candidate.registration_number == registration_number)
        )
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def list_applications_for_program(self, program_code: str) -> list[tuple[Candidate, Application]]:
        """Candidates that applied for a programme, each with the matching application only."""
        statement = (
            select(Candidate, Application)
            .join(Application, Application.candidate_id == Candidate.id)  # type: ignore[arg-type]
            .where(Application.program_code == program_code)
            .order_by(Candidate.registration_number)  # type: ignore[arg-type]
        )
        result = await self.session.execute(statement)
        return [(candidate, application) for candidate, application in result.all()]


def _duplicate_message(field: str, value: str | None) -> str:
    if value is None:
        return f"Duplicate value for {field}. Please use different value."
    return f"Duplicate value for {field}: {value}. Please use different value."
