"""Programmes API package.

This package contains the programme endpoints organized by audience:
- program_routes: public programme catalogue
- application_routes: staff lookup of applications per programme
"""

from fastapi import APIRouter

from app.api.v1.programs.application_routes import router as application_router
from app.api.v1.programs.program_routes import router as program_router

# Create a combined router for all programme-related endpoints
router = APIRouter()

router.include_router(program_router)
router.include_router(application_router)

__all__ = ["router"]
