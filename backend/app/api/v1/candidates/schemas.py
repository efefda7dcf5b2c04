"""API schemas for candidate signup and login endpoints."""

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.models.candidate import Application, Candidate
from app.models.enums import PaymentStatus

# =============================================================================
# Request Schemas
# =============================================================================


class BasicInfo(BaseModel):
    """Basic personal information entered on the first form step."""

    name: str
    gender: str
    date_of_birth: date
    community: str
    community_number: str | None = None
    other_community: str | None = None
    is_nri: bool = False


class ContactInfo(BaseModel):
    mobile: str = ""
    email: str = ""


class ApplicationInfo(BaseModel):
    """Programmes applied for, in preference order."""

    application_count: int
    application_type: str
    program_codes: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("program_code", "program_codes"),
    )
    program_names: list[str] = Field(default_factory=list)
    program_streams: list[str] = Field(default_factory=list)


class PersonalDetails(BaseModel):
    basic_info: BasicInfo
    contact_info: ContactInfo
    application_info: ApplicationInfo | None = None


class CourseSelection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str
    name: str = ""
    application_fee: int = 0


class SelectedCourse(BaseModel):
    course: CourseSelection
    scholarship_applied: bool = False


class PaymentDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    transaction_id: str | None = None
    transaction_date: datetime | None = None
    payment_method: str | None = None


class SignupRequest(BaseModel):
    """Request body for candidate signup."""

    personal_details: PersonalDetails
    selected_courses: list[SelectedCourse] | None = None
    payment_details: PaymentDetails | None = None


class SimulatePaymentRequest(BaseModel):
    """Request body for completing a signup through the simulated gateway."""

    candidate_details: SignupRequest = Field(validation_alias=AliasChoices("candidate_details", "candidateDetails"))
    amount: int
    simulate_type: str | None = Field(default=None, validation_alias=AliasChoices("simulate_type", "simulateType"))


class LoginRequest(BaseModel):
    """Request body for candidate login."""

    registration_number: int
    mobile: str


class FindRegistrationRequest(BaseModel):
    """Request body for looking up a registration number by mobile."""

    mobile: str = ""


# =============================================================================
# Response Schemas
# =============================================================================


class ApplicationResponse(BaseModel):
    """Application number assigned to one programme preference."""

    application_number: int
    program_code: str
    program_name: str
    stream: str | None
    preference_order: int

    @classmethod
    def from_model(cls, application: Application) -> "ApplicationResponse":
        """Create response from Application model."""
        return cls(
            application_number=application.application_number,
            program_code=application.program_code,
            program_name=application.program_name,
            stream=application.stream,
            preference_order=application.preference_order,
        )


class PaymentSummary(BaseModel):
    amount: int
    status: PaymentStatus


class SignupResponse(BaseModel):
    """Response for a successful signup."""

    message: str
    registration_number: int
    applications: list[ApplicationResponse]
    payment: PaymentSummary
    token: str
    callback_url: str


class CandidateUser(BaseModel):
    id: str
    registration_number: int
    role: str
    payment_status: PaymentStatus

    @classmethod
    def from_model(cls, candidate: Candidate, role: str) -> "CandidateUser":
        """Create response from Candidate model."""
        return cls(
            id=candidate.id,
            registration_number=candidate.registration_number,
            role=role,
            payment_status=candidate.payment_status,
        )


class LoginResponse(BaseModel):
    message: str
    token: str
    user: CandidateUser


class RegistrationNumberResponse(BaseModel):
    message: str
    registration_number: int
