"""API schemas for programme endpoints."""

from datetime import date

from pydantic import BaseModel

from app.models.candidate import Application, Candidate
from app.models.enums import ApplicationStatus, ApplicationType
from app.models.program import Program


class ProgramResponse(BaseModel):
    """Programme catalogue entry."""

    program_code: str
    program_name: str
    program_type: str | None
    type: str | None
    department_code: str
    department_name: str | None
    stream: str | None
    special: str | None

    @classmethod
    def from_model(cls, program: Program) -> "ProgramResponse":
        """Create response from Program model."""
        return cls(
            program_code=program.program_code,
            program_name=program.program_name,
            program_type=program.program_type,
            type=program.type,
            department_code=program.department_code,
            department_name=program.department_name,
            stream=program.stream,
            special=program.special,
        )


class ProgramListResponse(BaseModel):
    count: int
    programs: list[ProgramResponse]


class ProgramSummary(BaseModel):
    program_code: str
    program_name: str
    department_name: str | None
    stream: str | None
    shift: str | None


class PersonalDetailsResponse(BaseModel):
    full_name: str
    date_of_birth: date
    gender: str
    email: str
    phone: str
    community: str | None


class ProgramApplicationResponse(BaseModel):
    application_number: int
    application_type: ApplicationType
    program_code: str
    program_name: str
    stream: str | None
    status: ApplicationStatus
    preference_order: int


class ApplicantResponse(BaseModel):
    """Candidate with only the application for the requested programme."""

    registration_number: int
    personal_details: PersonalDetailsResponse
    application: ProgramApplicationResponse

    @classmethod
    def from_models(cls, candidate: Candidate, application: Application) -> "ApplicantResponse":
        """Create response from a Candidate and one of its applications."""
        return cls(
            registration_number=candidate.registration_number,
            personal_details=PersonalDetailsResponse(
                full_name=candidate.full_name,
                date_of_birth=candidate.date_of_birth,
                gender=candidate.gender,
                email=candidate.email,
                phone=candidate.phone,
                community=candidate.community,
            ),
            application=ProgramApplicationResponse(
                application_number=application.application_number,
                application_type=application.application_type,
                program_code=application.program_code,
                program_name=application.program_name,
                stream=application.stream,
                status=application.status,
                preference_order=application.preference_order,
            ),
        )


class ProgramApplicationsResponse(BaseModel):
    program: ProgramSummary
    total_applications: int
    data: list[ApplicantResponse]
