"""Single and batch number allocation from named sequences."""

from collections.abc import Mapping

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.models.enums import SequenceName
from app.services.sequences.counter_store import CounterStore, SqlCounterStore

logger = structlog.get_logger(__name__)


class SequenceAllocator:
    """Hands out unique, strictly increasing numbers per sequence name.

    Uniqueness rests entirely on the store's atomic increment; the allocator
    keeps no in-memory state about issued numbers, so any number of
    processes can allocate from the same sequences concurrently.

    A fresh sequence with start value S issues S + 1 first.
    """

    def __init__(self, store: CounterStore, start_values: Mapping[str, int] | None = None):
        self.store = store
        self.start_values = dict(start_values or {})

    def start_value(self, sequence_name: str) -> int:
        return self.start_values.get(sequence_name, 0)

    async def next(self, sequence_name: str) -> int:
        """Allocate the next number of a sequence.

        Raises:
            StoreUnavailable: The counter could not be incremented. Nothing was issued.
        """
        value = await self.store.increment(sequence_name, 1, start=self.start_value(sequence_name))
        logger.debug("Allocated sequence number", sequence=sequence_name, value=value)
        return value

    async def next_batch(self, sequence_name: str, count: int) -> list[int]:
        """Reserve `count` consecutive numbers in one atomic step.

        Returns the numbers in ascending order, so index i of the result
        belongs to the caller's i-th item. A count of zero returns an empty
        list without touching the store.

        Raises:
            ValueError: count is negative.
            StoreUnavailable: The counter could not be incremented. None of the
                numbers were issued.
        """
        if count < 0:
            raise ValueError(f"Batch size must not be negative, got {count}")
        if count == 0:
            return []

        last = await self.store.increment(sequence_name, count, start=self.start_value(sequence_name))
        first = last - count + 1
        logger.debug("Allocated sequence batch", sequence=sequence_name, first=first, last=last)
        return list(range(first, last + 1))


def build_sequence_allocator(session_maker: async_sessionmaker[AsyncSession]) -> SequenceAllocator:
    """Allocator over the database counters with start values from settings."""
    return SequenceAllocator(
        SqlCounterStore(session_maker),
        start_values={
            SequenceName.REGISTRATION_NUMBER: settings.registration_number_start,
            SequenceName.APPLICATION_NUMBER: settings.application_number_start,
        },
    )
