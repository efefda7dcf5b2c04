"""Candidate creation and lookup service."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from app.models.candidate import Candidate
from app.models.enums import SequenceName
from app.services.candidates.candidate_data import NewCandidate
from app.services.candidates.exceptions import (
    CandidateNotFound,
    DuplicateRegistrationNumber,
    InvalidCredentials,
)
from app.services.candidates.repository import CandidateRepository
from app.services.sequences.allocator import SequenceAllocator

logger = structlog.get_logger(__name__)

DEFAULT_MAX_RETRIES = 3


class CandidateService:
    """Service for candidate records."""

    def __init__(
        self,
        session: AsyncSession,
        allocator: SequenceAllocator,
        repository: CandidateRepository | None = None,
    ):
        self.session = session
        self.allocator = allocator
        self.repository = repository or CandidateRepository(session)

    async def create_with_retry(self, data: NewCandidate, max_retries: int = DEFAULT_MAX_RETRIES) -> Candidate:
        """Insert a candidate, drawing a new registration number on collision.

        data.registration_number must already be set, normally from the
        registration_number sequence. The sequence alone keeps numbers unique;
        this loop covers numbers that were issued outside it (seeded rows,
        counter resets). Only duplicate registration numbers are retried, each
        retry costing one allocation and one insert. When the budget runs out
        the DuplicateRegistrationNumber of the last attempt propagates.

        Raises:
            DuplicateRegistrationNumber: Still colliding after max_retries retries.
            StoreUnavailable: A replacement number could not be allocated.
        """
        if max_retries < 0:
            raise ValueError(f"max_retries must not be negative, got {max_retries}")

        candidate: Candidate | None = None
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(DuplicateRegistrationNumber),
            stop=stop_after_attempt(max_retries + 1),
            reraise=True,
        ):
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                if attempt_number > 1:
                    taken = data.registration_number
                    data.registration_number = await self.allocator.next(SequenceName.REGISTRATION_NUMBER)
                    logger.warning(
                        "Registration number taken, retrying",
                        attempt=attempt_number,
                        max_retries=max_retries,
                        taken=taken,
                        registration_number=data.registration_number,
                    )
                candidate = await self.repository.insert(data)

        # AsyncRetrying either succeeds or reraises the last error
        assert candidate is not None
        return candidate

    async def find_registration_number(self, mobile: str) -> int:
        """Registration number of the candidate registered with a mobile number."""
        candidate = await self.repository.find_by_phone(mobile)
        if not candidate:
            raise CandidateNotFound()
        return candidate.registration_number

    async def is_registered(self, mobile: str) -> bool:
        return await self.repository.find_by_phone(mobile) is not None

    async def authenticate(self, registration_number: int, mobile: str) -> Candidate:
        """Match a registration number against the mobile it was registered with."""
        candidate = await self.repository.find_by_registration_number(registration_number)
        if not candidate:
            raise InvalidCredentials("Invalid Registration Number")
        if candidate.phone != mobile:
            raise InvalidCredentials("Invalid Mobile Number")
        return candidate
