"""Candidate API package.

- auth_routes: signup, login and registration number lookup
"""

from app.api.v1.candidates.auth_routes import router

__all__ = ["router"]
