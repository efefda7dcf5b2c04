"""Tests for CandidateService creation retries and lookups."""

import pytest
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.candidate import Application, Candidate
from app.models.enums import SequenceName
from app.services.candidates.candidate_service import CandidateService
from app.services.candidates.exceptions import (
    CandidateNotFound,
    DuplicateRegistrationNumber,
    InvalidCredentials,
)
from app.services.candidates.repository import CandidateRepository
from app.services.exceptions import DuplicateKeyError, StoreUnavailable
from app.services.sequences.allocator import SequenceAllocator
from tests.conftest import REGISTRATION_START, make_new_candidate
from tests.fakes import InMemoryCounterStore, ScriptedRepository, UnavailableCounterStore


def _service(allocator: SequenceAllocator, repository: ScriptedRepository) -> CandidateService:
    return CandidateService(session=None, allocator=allocator, repository=repository)  # type: ignore[arg-type]


class TestCreateWithRetry:
    async def test_first_attempt_succeeds(
        self, memory_allocator: SequenceAllocator, memory_store: InMemoryCounterStore
    ) -> None:
        repository = ScriptedRepository([None])
        service = _service(memory_allocator, repository)

        candidate = await service.create_with_retry(make_new_candidate(REGISTRATION_START + 1))

        assert candidate.registration_number == REGISTRATION_START + 1
        assert repository.insert_calls == 1
        assert memory_store.calls == []

    async def test_retries_duplicates_with_fresh_numbers(
        self, memory_allocator: SequenceAllocator, memory_store: InMemoryCounterStore
    ) -> None:
        repository = ScriptedRepository(
            [
                DuplicateRegistrationNumber(REGISTRATION_START + 1),
                DuplicateRegistrationNumber(REGISTRATION_START + 1),
                None,
            ]
        )
        service = _service(memory_allocator, repository)

        candidate = await service.create_with_retry(make_new_candidate(REGISTRATION_START + 1), max_retries=3)

        assert repository.insert_calls == 3
        assert len(memory_store.calls) == 2
        assert repository.inserted_numbers == [
            REGISTRATION_START + 1,
            REGISTRATION_START + 1,
            REGISTRATION_START + 2,
        ]
        assert candidate.registration_number == REGISTRATION_START + 2

    async def test_exhausted_retries_surface_last_duplicate(
        self, memory_allocator: SequenceAllocator, memory_store: InMemoryCounterStore
    ) -> None:
        errors = [DuplicateRegistrationNumber(REGISTRATION_START + n) for n in range(1, 5)]
        repository = ScriptedRepository(errors)
        service = _service(memory_allocator, repository)

        with pytest.raises(DuplicateRegistrationNumber) as exc_info:
            await service.create_with_retry(make_new_candidate(REGISTRATION_START + 1), max_retries=3)

        assert exc_info.value is errors[-1]
        assert repository.insert_calls == 4
        assert len(memory_store.calls) == 3

    async def test_zero_retries_means_single_attempt(
        self, memory_allocator: SequenceAllocator, memory_store: InMemoryCounterStore
    ) -> None:
        repository = ScriptedRepository([DuplicateRegistrationNumber(REGISTRATION_START + 1)])
        service = _service(memory_allocator, repository)

        with pytest.raises(DuplicateRegistrationNumber):
            await service.create_with_retry(make_new_candidate(REGISTRATION_START + 1), max_retries=0)

        assert repository.insert_calls == 1
        assert memory_store.calls == []

    async def test_other_errors_are_not_retried(
        self, memory_allocator: SequenceAllocator, memory_store: InMemoryCounterStore
    ) -> None:
        error = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: candidates.email"))
        repository = ScriptedRepository([error, None])
        service = _service(memory_allocator, repository)

        with pytest.raises(IntegrityError):
            await service.create_with_retry(make_new_candidate(REGISTRATION_START + 1))

        assert repository.insert_calls == 1
        assert memory_store.calls == []

    async def test_other_duplicate_keys_are_not_retried(
        self, memory_allocator: SequenceAllocator, memory_store: InMemoryCounterStore
    ) -> None:
        repository = ScriptedRepository([DuplicateKeyError("application_number", "260001"), None])
        service = _service(memory_allocator, repository)

        with pytest.raises(DuplicateKeyError):
            await service.create_with_retry(make_new_candidate(REGISTRATION_START + 1))

        assert repository.insert_calls == 1
        assert memory_store.calls == []

    async def test_negative_max_retries_rejected(self, memory_allocator: SequenceAllocator) -> None:
        repository = ScriptedRepository([None])
        service = _service(memory_allocator, repository)

        with pytest.raises(ValueError):
            await service.create_with_retry(make_new_candidate(REGISTRATION_START + 1), max_retries=-1)

        assert repository.insert_calls == 0

    async def test_store_failure_during_retry_propagates(self) -> None:
        store = UnavailableCounterStore()
        repository = ScriptedRepository([DuplicateRegistrationNumber(REGISTRATION_START + 1), None])
        service = _service(SequenceAllocator(store), repository)

        with pytest.raises(StoreUnavailable):
            await service.create_with_retry(make_new_candidate(REGISTRATION_START + 1))

        assert repository.insert_calls == 1
        assert store.calls == 1


class TestCreateWithRetryDatabase:
    async def test_duplicate_insert_persists_nothing(self, session: AsyncSession) -> None:
        repository = CandidateRepository(session)
        await repository.insert(
            make_new_candidate(REGISTRATION_START + 1, phone="9000000001", application_numbers=(1,))
        )

        with pytest.raises(DuplicateRegistrationNumber) as exc_info:
            await repository.insert(
                make_new_candidate(REGISTRATION_START + 1, phone="9000000002", application_numbers=(2, 3))
            )

        assert exc_info.value.value == REGISTRATION_START + 1
        candidates = await session.execute(select(func.count()).select_from(Candidate))
        applications = await session.execute(select(func.count()).select_from(Application))
        assert candidates.scalar_one() == 1
        assert applications.scalar_one() == 1

    async def test_other_unique_violation_is_not_a_duplicate_registration(self, session: AsyncSession) -> None:
        repository = CandidateRepository(session)
        await repository.insert(
            make_new_candidate(REGISTRATION_START + 1, phone="9000000001", application_numbers=(1,))
        )

        with pytest.raises(DuplicateKeyError) as exc_info:
            await repository.insert(
                make_new_candidate(REGISTRATION_START + 2, phone="9000000002", application_numbers=(1,))
            )

        assert not isinstance(exc_info.value, DuplicateRegistrationNumber)
        assert exc_info.value.constraint == "application_number"
        assert await repository.find_by_registration_number(REGISTRATION_START + 2) is None

    async def test_collision_with_seeded_row_is_resolved(
        self, session: AsyncSession, allocator: SequenceAllocator
    ) -> None:
        # Row inserted outside the sequence holds the first number it will issue
        repository = CandidateRepository(session)
        await repository.insert(make_new_candidate(REGISTRATION_START + 1, phone="9000000001"))

        service = CandidateService(session, allocator)
        first = await allocator.next(SequenceName.REGISTRATION_NUMBER)
        candidate = await service.create_with_retry(make_new_candidate(first, phone="9000000002"))

        assert first == REGISTRATION_START + 1
        assert candidate.registration_number == REGISTRATION_START + 2

        stored = await repository.find_by_registration_number(REGISTRATION_START + 2)
        assert stored is not None
        assert stored.phone == "9000000002"


class TestLookups:
    async def test_find_registration_number(self, session: AsyncSession, allocator: SequenceAllocator) -> None:
        await CandidateRepository(session).insert(make_new_candidate(REGISTRATION_START + 7, phone="9123456789"))
        service = CandidateService(session, allocator)

        assert await service.find_registration_number("9123456789") == REGISTRATION_START + 7
        assert await service.is_registered("9123456789")
        assert not await service.is_registered("9000000000")

    async def test_find_registration_number_not_found(
        self, session: AsyncSession, allocator: SequenceAllocator
    ) -> None:
        service = CandidateService(session, allocator)

        with pytest.raises(CandidateNotFound):
            await service.find_registration_number("9000000000")

    async def test_authenticate(self, session: AsyncSession, allocator: SequenceAllocator) -> None:
        await CandidateRepository(session).insert(make_new_candidate(REGISTRATION_START + 3, phone="9123456789"))
        service = CandidateService(session, allocator)

        candidate = await service.authenticate(REGISTRATION_START + 3, "9123456789")
        assert candidate.phone == "9123456789"

        with pytest.raises(InvalidCredentials, match="Invalid Mobile Number"):
            await service.authenticate(REGISTRATION_START + 3, "9000000000")
        with pytest.raises(InvalidCredentials, match="Invalid Registration Number"):
            await service.authenticate(REGISTRATION_START + 99, "9123456789")
