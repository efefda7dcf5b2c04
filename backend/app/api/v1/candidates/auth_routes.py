"""Candidate signup and login API endpoints."""

from collections.abc import Awaitable

import structlog
from fastapi import APIRouter, HTTPException, Request

from app.api.v1.candidates.schemas import (
    ApplicationResponse,
    CandidateUser,
    FindRegistrationRequest,
    LoginRequest,
    LoginResponse,
    PaymentSummary,
    RegistrationNumberResponse,
    SignupRequest,
    SignupResponse,
    SimulatePaymentRequest,
)
from app.api.v1.dependencies import CandidateServiceDep, SignupServiceDep
from app.services.candidates.exceptions import (
    CandidateAlreadyRegistered,
    CandidateNotFound,
    DuplicateRegistrationNumber,
    InvalidCredentials,
    InvalidSignup,
    PaymentFailed,
)
from app.services.candidates.signup_service import ClientInfo, SignupResult
from app.services.exceptions import DuplicateKeyError, StoreUnavailable
from app.utils.tokens import CANDIDATE_ROLE, create_candidate_token

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _client_info(request: Request) -> ClientInfo:
    return ClientInfo(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def _signup_response(pending: Awaitable[SignupResult]) -> SignupResponse:
    """Await a signup and map service errors to HTTP errors."""
    try:
        result = await pending
    except InvalidSignup as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CandidateAlreadyRegistered as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreUnavailable:
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")
    except DuplicateRegistrationNumber:
        logger.exception("Registration number retries exhausted")
        raise HTTPException(status_code=500, detail="Internal server error")
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    candidate = result.candidate
    return SignupResponse(
        message="Registration successful",
        registration_number=candidate.registration_number,
        applications=[ApplicationResponse.from_model(app) for app in candidate.applications],
        payment=PaymentSummary(amount=candidate.payment_amount, status=candidate.payment_status),
        token=result.token,
        callback_url=result.callback_url,
    )


@router.post("/signup", response_model=SignupResponse, status_code=201, operation_id="candidateSignup")
async def signup(
    body: SignupRequest,
    request: Request,
    service: SignupServiceDep,
) -> SignupResponse:
    """Register a candidate and assign registration and application numbers."""
    return await _signup_response(service.signup(body, _client_info(request)))


@router.post(
    "/simulate-payment",
    response_model=SignupResponse,
    status_code=201,
    operation_id="simulatePayment",
)
async def simulate_payment(
    body: SimulatePaymentRequest,
    request: Request,
    service: SignupServiceDep,
) -> SignupResponse:
    """Pay through the simulated gateway and register the candidate as paid."""
    try:
        pending = service.simulate_payment(
            body.candidate_details, body.amount, body.simulate_type, _client_info(request)
        )
        return await _signup_response(pending)
    except PaymentFailed as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=LoginResponse, operation_id="candidateLogin")
async def login(
    body: LoginRequest,
    service: CandidateServiceDep,
) -> LoginResponse:
    """Log a candidate in with registration number and mobile."""
    try:
        candidate = await service.authenticate(body.registration_number, body.mobile)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e))

    return LoginResponse(
        message="Login successful",
        token=create_candidate_token(candidate.id, candidate.registration_number),
        user=CandidateUser.from_model(candidate, CANDIDATE_ROLE),
    )


@router.post(
    "/forgot-registration",
    response_model=RegistrationNumberResponse,
    operation_id="findRegistrationNumber",
)
async def find_registration_number(
    body: FindRegistrationRequest,
    service: CandidateServiceDep,
) -> RegistrationNumberResponse:
    """Look up a registration number by the mobile it was registered with."""
    if not body.mobile:
        raise HTTPException(status_code=400, detail="Mobile number is required")
    try:
        registration_number = await service.find_registration_number(body.mobile)
    except CandidateNotFound:
        raise HTTPException(status_code=404, detail="No registration found for this mobile number")

    return RegistrationNumberResponse(
        message="Registration number found",
        registration_number=registration_number,
    )
