"""Programme catalogue and per-programme application lookups."""

from collections.abc import Iterable

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from app.models.candidate import Application, Candidate
from app.models.program import Program
from app.services.candidates.repository import CandidateRepository
from app.services.programs.exceptions import InvalidProgram

logger = structlog.get_logger(__name__)


class ProgramService:
    """Service for the programme catalogue."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_programs(self) -> list[Program]:
        """Visible programmes sorted by name."""
        statement = select(Program).where(col(Program.show).is_(True)).order_by(col(Program.program_name))
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_program(self, department_code: str, program_code: str) -> Program:
        """Visible programme by department and code."""
        statement = select(Program).where(
            Program.department_code == department_code,
            Program.program_code == program_code,
            col(Program.show).is_(True),
        )
        result = await self.session.execute(statement)
        program = result.scalars().first()
        if not program:
            raise InvalidProgram(f"Invalid department code or program code: {department_code}/{program_code}")
        return program

    async def program_names(self, program_codes: Iterable[str]) -> dict[str, str]:
        """Catalogue names for the given codes; unknown codes are left out."""
        codes = list(program_codes)
        if not codes:
            return {}
        statement = select(Program).where(col(Program.program_code).in_(codes))
        result = await self.session.execute(statement)
        return {p.program_code: p.program_name for p in result.scalars().all() if p.program_name}

    async def list_applications(
        self,
        department_code: str,
        program_code: str,
    ) -> tuple[Program, list[tuple[Candidate, Application]]]:
        """Programme plus every candidate who applied for it, with the matching application."""
        program = await self.get_program(department_code, program_code)
        applications = await CandidateRepository(self.session).list_applications_for_program(program_code)
        logger.debug("Listed programme applications", program_code=program_code, total=len(applications))
        return program, applications
