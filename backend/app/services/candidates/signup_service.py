"""Candidate signup workflow.

Validates the signup form, reserves one application number per programme
preference, draws a registration number and persists the candidate.
All validation happens before any number is allocated; numbers allocated
for a signup that later fails are never reused.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from app.config import settings
from app.models.candidate import Candidate
from app.models.enums import ApplicationType, PaymentStatus, SequenceName
from app.services.candidates.candidate_data import NewApplication, NewCandidate
from app.services.candidates.candidate_service import CandidateService
from app.services.candidates.exceptions import CandidateAlreadyRegistered, InvalidSignup, PaymentFailed
from app.services.programs.program_service import ProgramService
from app.utils.datetime_utils import age_on, today
from app.utils.tokens import create_candidate_token

if TYPE_CHECKING:
    from app.api.v1.candidates.schemas import ApplicationInfo, SignupRequest

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Communities exempt from the application fee; they must quote a community certificate number
FREE_COMMUNITIES = frozenset({"SC", "ST", "SCA"})

# Per-application fee when no course fees are submitted
DEFAULT_FEES = {ApplicationType.UG: 100, ApplicationType.PG: 160}

MIN_AGE = 16
MAX_AGE = 100

SIMULATED_PAYMENT_METHOD = "ccavenue"


@dataclass
class ClientInfo:
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass
class PaymentInfo:
    """Payment details recorded with a signup."""

    status: str | None = None
    transaction_id: str | None = None
    transaction_date: datetime | None = None
    payment_method: str | None = None


@dataclass
class SignupResult:
    candidate: Candidate
    token: str
    callback_url: str


class SignupService:
    """Service for registering new candidates."""

    def __init__(self, candidates: CandidateService, programs: ProgramService):
        self.candidates = candidates
        self.programs = programs

    async def signup(
        self,
        request: "SignupRequest",
        client: ClientInfo | None = None,
        payment: PaymentInfo | None = None,
    ) -> SignupResult:
        """Register a candidate for one or more programmes.

        `payment` replaces the payment details submitted with the form.

        Raises:
            InvalidSignup: The form failed validation. Nothing was allocated.
            CandidateAlreadyRegistered: The mobile number is already registered.
            DuplicateRegistrationNumber: Registration retries were exhausted.
            StoreUnavailable: Numbers could not be allocated.
        """
        client = client or ClientInfo()
        details = request.personal_details
        basic = details.basic_info
        contact = details.contact_info

        email = contact.email.strip()
        mobile = contact.mobile.strip()
        if not email or not mobile:
            raise InvalidSignup("Email and mobile are required")
        if not EMAIL_PATTERN.match(email):
            raise InvalidSignup("Invalid email format")

        if basic.community in FREE_COMMUNITIES and not basic.community_number:
            raise InvalidSignup("Community number is mandatory for SC / ST / SCA")

        if await self.candidates.is_registered(mobile):
            raise CandidateAlreadyRegistered("Candidate already registered with this mobile number")

        info = details.application_info
        if info is None:
            raise InvalidSignup("Application information is required")
        application_type = self._validate_application_info(info)

        age = age_on(basic.date_of_birth, today())
        if not MIN_AGE <= age <= MAX_AGE:
            raise InvalidSignup(f"Age must be between {MIN_AGE} and {MAX_AGE} years")

        catalogue_names = await self.programs.program_names(info.program_codes)
        unknown = [code for code in info.program_codes if code not in catalogue_names]
        if unknown:
            # Names submitted with the form are used for these
            logger.warning("Program codes not found in catalogue", program_codes=unknown)

        total_amount = self._total_fee(request, application_type)
        if payment is None:
            submitted = request.payment_details
            payment = PaymentInfo(**submitted.model_dump()) if submitted else PaymentInfo()
        if total_amount == 0 or payment.status == PaymentStatus.SUCCESS:
            payment_status = PaymentStatus.SUCCESS
        else:
            payment_status = PaymentStatus.PENDING

        allocator = self.candidates.allocator
        application_numbers = await allocator.next_batch(SequenceName.APPLICATION_NUMBER, len(info.program_codes))
        applications = [
            NewApplication(
                application_number=number,
                application_type=application_type,
                program_code=code,
                program_name=name or catalogue_names.get(code, ""),
                stream=stream,
                preference_order=position,
            )
            for position, (number, code, name, stream) in enumerate(
                zip(application_numbers, info.program_codes, info.program_names, info.program_streams, strict=True),
                start=1,
            )
        ]

        data = NewCandidate(
            registration_number=await allocator.next(SequenceName.REGISTRATION_NUMBER),
            academic_year=settings.academic_year,
            full_name=basic.name,
            date_of_birth=basic.date_of_birth,
            gender=basic.gender,
            email=email,
            phone=mobile,
            community=basic.other_community if basic.community == "Others" else basic.community,
            programme_type=application_type,
            payment_amount=total_amount,
            payment_status=payment_status,
            transaction_id=payment.transaction_id,
            payment_date=payment.transaction_date,
            payment_method=payment.payment_method,
            ip_address=client.ip_address,
            user_agent=client.user_agent or "Unknown",
            applications=applications,
        )
        candidate = await self.candidates.create_with_retry(data, max_retries=settings.candidate_create_max_retries)

        logger.info(
            "Candidate registered",
            candidate_id=candidate.id,
            registration_number=candidate.registration_number,
            application_numbers=application_numbers,
            payment_status=payment_status,
        )

        registration_number = candidate.registration_number
        if payment_status == PaymentStatus.SUCCESS:
            callback_url = f"/application-success?registration_number={registration_number}"
        else:
            callback_url = f"/payment?registration_number={registration_number}&amount={total_amount}"

        return SignupResult(
            candidate=candidate,
            token=create_candidate_token(candidate.id, registration_number),
            callback_url=callback_url,
        )

    async def simulate_payment(
        self,
        request: "SignupRequest",
        amount: int,
        simulate_type: str | None,
        client: ClientInfo | None = None,
    ) -> SignupResult:
        """Complete a signup through a simulated payment gateway.

        A zero amount, a fee-exempt community and NRI candidates always
        succeed. A successful payment registers the candidate as paid with a
        generated transaction id.

        Raises:
            InvalidSignup: simulate_type is missing or unknown.
            PaymentFailed: The simulated payment failed. Nothing was allocated.
            Everything `signup` raises.
        """
        basic = request.personal_details.basic_info
        if amount == 0 or basic.community in FREE_COMMUNITIES or basic.is_nri:
            simulate_type = "success"

        if not simulate_type:
            raise InvalidSignup("Candidate details, amount, and simulateType are required")
        if simulate_type == "failure":
            logger.info("Simulated payment failed", mobile=request.personal_details.contact_info.mobile)
            raise PaymentFailed("Payment failed")
        if simulate_type != "success":
            raise InvalidSignup("Invalid simulateType. Must be 'success' or 'failure'")

        now = datetime.now(UTC)
        payment = PaymentInfo(
            status=PaymentStatus.SUCCESS,
            transaction_id=f"TXN{int(now.timestamp() * 1000)}",
            transaction_date=now,
            payment_method=SIMULATED_PAYMENT_METHOD,
        )
        return await self.signup(request, client, payment=payment)

    def _validate_application_info(self, info: "ApplicationInfo") -> ApplicationType:
        count = info.application_count
        if not info.program_codes:
            raise InvalidSignup("Program codes are required and must be an array")
        if len(info.program_codes) != count:
            raise InvalidSignup(
                f"Program code count ({len(info.program_codes)}) does not match application count ({count})"
            )
        if len(info.program_names) != count:
            raise InvalidSignup("Program names are required and must match application count")
        if len(info.program_streams) != count:
            raise InvalidSignup("Program streams are required and must match application count")

        try:
            return ApplicationType(info.application_type)
        except ValueError:
            valid = ", ".join(t.value for t in ApplicationType)
            raise InvalidSignup(f"Invalid application type. Must be one of: {valid}") from None

    def _total_fee(self, request: "SignupRequest", application_type: ApplicationType) -> int:
        """Fee for the whole signup, in rupees."""
        if request.selected_courses:
            return sum(item.course.application_fee for item in request.selected_courses)

        info = request.personal_details.application_info
        assert info is not None
        if request.personal_details.basic_info.community in FREE_COMMUNITIES:
            return 0
        return DEFAULT_FEES.get(application_type, 0) * info.application_count
