"""Signed bearer tokens for candidates."""

from datetime import UTC, datetime, timedelta

import jwt

from app.config import settings

CANDIDATE_ROLE = "candidate"


def create_candidate_token(candidate_id: str, registration_number: int) -> str:
    """Create a JWT identifying a candidate.

    The token carries the registration number the candidate was actually
    persisted with, which can differ from the first one drawn at signup.
    """
    now = datetime.now(UTC)
    return jwt.encode(
        {
            "sub": candidate_id,
            "registration_number": registration_number,
            "role": CANDIDATE_ROLE,
            "iat": now,
            "exp": now + timedelta(minutes=settings.jwt_expires_minutes),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
