"""Atomic upsert-and-increment on the sequence_counters table."""

from collections.abc import Callable
from typing import Any, Protocol

import structlog
from sqlalchemy import exc as sa_exc
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.dml import Insert

from app.models.sequence_counter import SequenceCounter
from app.services.exceptions import StoreUnavailable

logger = structlog.get_logger(__name__)

# Failures meaning the store could not be reached or the statement could not run
_UNAVAILABLE_ERRORS: tuple[type[BaseException], ...] = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.TimeoutError,  # connection pool exhausted
    OSError,  # raised by drivers on refused or reset connections
    TimeoutError,
)

_DIALECT_INSERTS: dict[str, Callable[[Any], Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CounterStore(Protocol):
    """Storage primitive the allocator is built on."""

    async def increment(self, name: str, by: int, *, start: int) -> int:
        """Add `by` to counter `name` and return the new value.

        A missing counter is created holding `start` before the increment
        is applied. The read, increment and write happen atomically.
        """
        ...


def build_increment_statement(dialect_name: str, name: str, by: int, start: int) -> Insert:
    """INSERT ... ON CONFLICT DO UPDATE ... RETURNING for the given dialect."""
    insert = _DIALECT_INSERTS.get(dialect_name)
    if insert is None:
        raise NotImplementedError(f"No atomic upsert available for dialect {dialect_name!r}")

    table = SequenceCounter.__table__  # type: ignore[attr-defined]
    statement = insert(table).values(name=name, value=start + by)
    statement = statement.on_conflict_do_update(
        index_elements=[table.c.name],
        set_={"value": table.c.value + by},
    )
    result: Insert = statement.returning(table.c.value)
    return result


class SqlCounterStore:
    """CounterStore running each increment in its own short transaction.

    The increment is committed before the caller uses the number, so the
    counter row lock is held only for a single statement and a number,
    once returned, stays consumed even if the caller's own work fails.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def increment(self, name: str, by: int, *, start: int) -> int:
        if by < 1:
            raise ValueError(f"Increment must be positive, got {by}")

        try:
            async with self.session_maker() as session, session.begin():
                statement = build_increment_statement(session.get_bind().dialect.name, name, by, start)
                result = await session.execute(statement)
                value: int = result.scalar_one()
        except _UNAVAILABLE_ERRORS as e:
            logger.error("Sequence counter store unavailable", sequence=name, increment=by, error=str(e))
            raise StoreUnavailable(f"Could not increment sequence {name!r}") from e

        return value
