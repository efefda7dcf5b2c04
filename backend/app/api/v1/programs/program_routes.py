"""Programme catalogue API endpoints."""

from fastapi import APIRouter

from app.api.v1.dependencies import ProgramServiceDep
from app.api.v1.programs.schemas import ProgramListResponse, ProgramResponse

router = APIRouter(tags=["programs"])


@router.get("/programs", response_model=ProgramListResponse, operation_id="listPrograms")
async def list_programs(service: ProgramServiceDep) -> ProgramListResponse:
    """List visible programmes sorted by name."""
    programs = await service.list_programs()
    return ProgramListResponse(
        count=len(programs),
        programs=[ProgramResponse.from_model(program) for program in programs],
    )
