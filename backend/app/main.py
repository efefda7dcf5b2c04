"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import candidates, health, programs
from app.config import settings
from app.db import dispose_engine
from app.logging import setup_logging

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info(
        "Starting Admissions API",
        debug=settings.debug,
        academic_year=settings.academic_year,
    )

    yield

    logger.info("Shutting down Admissions API")
    await dispose_engine()
    logger.info("Database connections disposed")


app = FastAPI(
    title="Admissions API",
    description="Candidate registration and admission applications",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(candidates.router, prefix="/api/v1")
app.include_router(programs.router, prefix="/api/v1")
