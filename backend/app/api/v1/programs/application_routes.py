"""Staff lookup of applications per programme."""

import structlog
from fastapi import APIRouter, HTTPException

from app.api.v1.dependencies import ProgramServiceDep
from app.api.v1.programs.schemas import (
    ApplicantResponse,
    ProgramApplicationsResponse,
    ProgramSummary,
)
from app.services.programs.exceptions import InvalidProgram

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["applications"])


@router.get(
    "/applications/{department_code}/{program_code}",
    response_model=ProgramApplicationsResponse,
    operation_id="listProgramApplications",
)
async def list_program_applications(
    department_code: str,
    program_code: str,
    service: ProgramServiceDep,
) -> ProgramApplicationsResponse:
    """List candidates who applied for a programme of a department.

    Each candidate carries only the application for the requested programme.
    """
    try:
        program, applications = await service.list_applications(department_code, program_code)
    except InvalidProgram:
        raise HTTPException(status_code=400, detail="Invalid department code or program code")

    return ProgramApplicationsResponse(
        program=ProgramSummary(
            program_code=program.program_code,
            program_name=program.program_name,
            department_name=program.department_name,
            stream=program.stream,
            shift=program.shift,
        ),
        total_applications=len(applications),
        data=[ApplicantResponse.from_models(candidate, application) for candidate, application in applications],
    )
