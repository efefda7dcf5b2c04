"""Test configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

# Set testing environment before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["REGISTRATION_NUMBER_START"] = "202600000"
os.environ["APPLICATION_NUMBER_START"] = "260000"

from app.api.v1.dependencies import get_sequence_allocator  # noqa: E402
from app.db import get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models.enums import ApplicationType, SequenceName  # noqa: E402
from app.models.program import Program  # noqa: E402
from app.services.candidates.candidate_data import NewApplication, NewCandidate  # noqa: E402
from app.services.sequences.allocator import SequenceAllocator, build_sequence_allocator  # noqa: E402
from tests.fakes import InMemoryCounterStore  # noqa: E402

REGISTRATION_START = 202600000
APPLICATION_START = 260000


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """File-backed SQLite engine; every session gets its own connection."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    async with session_maker() as db_session:
        yield db_session


@pytest.fixture
def allocator(session_maker: async_sessionmaker[AsyncSession]) -> SequenceAllocator:
    """Allocator over the test database counters."""
    return build_sequence_allocator(session_maker)


@pytest.fixture
def memory_store() -> InMemoryCounterStore:
    return InMemoryCounterStore()


@pytest.fixture
def memory_allocator(memory_store: InMemoryCounterStore) -> SequenceAllocator:
    return SequenceAllocator(
        memory_store,
        start_values={
            SequenceName.REGISTRATION_NUMBER: REGISTRATION_START,
            SequenceName.APPLICATION_NUMBER: APPLICATION_START,
        },
    )


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    allocator: SequenceAllocator,
) -> AsyncGenerator[AsyncClient]:
    """API client wired to the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as db_session:
            yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_sequence_allocator] = lambda: allocator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def programs(session: AsyncSession) -> list[Program]:
    """Small programme catalogue."""
    catalogue = [
        Program(
            program_code="UG-BSC-CS",
            program_name="B.Sc. Computer Science",
            department_code="CS",
            department_name="Computer Science",
            type="Sciences",
            program_type="UG",
            stream="Aided",
            shift="Shift-1",
        ),
        Program(
            program_code="UG-BA-ENG",
            program_name="B.A. English",
            department_code="ENG",
            department_name="English",
            type="Arts",
            program_type="UG",
            stream="Self-Financed",
            shift="Shift-2",
        ),
        Program(
            program_code="PG-MSC-PHY",
            program_name="M.Sc. Physics",
            department_code="PHY",
            department_name="Physics",
            type="Sciences",
            program_type="PG",
            show=False,
        ),
    ]
    session.add_all(catalogue)
    await session.commit()
    return catalogue


def make_new_candidate(
    registration_number: int,
    phone: str = "9876543210",
    application_numbers: tuple[int, ...] = (),
) -> NewCandidate:
    """NewCandidate with plausible personal details."""
    return NewCandidate(
        registration_number=registration_number,
        academic_year="2026-2027",
        full_name="Priya Raman",
        date_of_birth=date(2006, 4, 12),
        gender="Female",
        email="Priya.Raman@example.com",
        phone=phone,
        programme_type=ApplicationType.UG,
        community="BC",
        applications=[
            NewApplication(
                application_number=number,
                application_type=ApplicationType.UG,
                program_code="UG-BSC-CS",
                program_name="B.Sc. Computer Science",
                preference_order=position,
                stream="Aided",
            )
            for position, number in enumerate(application_numbers, start=1)
        ],
    )


def signup_payload(
    mobile: str = "9876543210",
    email: str = "priya.raman@example.com",
    program_codes: tuple[str, ...] = ("UG-BSC-CS", "UG-BA-ENG"),
    application_type: str = "UG",
    community: str = "BC",
    date_of_birth: str = "2006-04-12",
) -> dict:
    """Signup request body as the frontend sends it."""
    names = {"UG-BSC-CS": "B.Sc. Computer Science", "UG-BA-ENG": "B.A. English"}
    return {
        "personal_details": {
            "basic_info": {
                "name": "Priya Raman",
                "gender": "Female",
                "date_of_birth": date_of_birth,
                "community": community,
            },
            "contact_info": {"mobile": mobile, "email": email},
            "application_info": {
                "application_count": len(program_codes),
                "application_type": application_type,
                "program_code": list(program_codes),
                "program_names": [names.get(code, "") for code in program_codes],
                "program_streams": ["Aided"] * len(program_codes),
            },
        }
    }
