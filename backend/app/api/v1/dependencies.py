"""FastAPI dependencies for service injection."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import async_session_maker, get_session
from app.services.candidates.candidate_service import CandidateService
from app.services.candidates.signup_service import SignupService
from app.services.programs.program_service import ProgramService
from app.services.sequences.allocator import SequenceAllocator, build_sequence_allocator


def get_sequence_allocator() -> SequenceAllocator:
    """Get a SequenceAllocator over the database counters.

    Each allocation runs in its own session, independent of the request session.
    """
    return build_sequence_allocator(async_session_maker)


async def get_candidate_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    allocator: Annotated[SequenceAllocator, Depends(get_sequence_allocator)],
) -> CandidateService:
    """Get a CandidateService instance with the current session."""
    return CandidateService(session, allocator)


async def get_program_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProgramService:
    """Get a ProgramService instance with the current session."""
    return ProgramService(session)


async def get_signup_service(
    candidates: Annotated[CandidateService, Depends(get_candidate_service)],
    programs: Annotated[ProgramService, Depends(get_program_service)],
) -> SignupService:
    """Get a SignupService wired to the candidate and programme services."""
    return SignupService(candidates, programs)


# Type aliases for cleaner endpoint signatures
CandidateServiceDep = Annotated[CandidateService, Depends(get_candidate_service)]
ProgramServiceDep = Annotated[ProgramService, Depends(get_program_service)]
SignupServiceDep = Annotated[SignupService, Depends(get_signup_service)]
