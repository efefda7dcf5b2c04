"""Sequence counter model backing registration and application numbers."""

from sqlalchemy import BigInteger, Column
from sqlmodel import Field, SQLModel


class SequenceCounter(SQLModel, table=True):
    """Last number issued for one named sequence.

    Rows are created lazily on first allocation and only ever mutated by
    the atomic upsert-and-increment in SqlCounterStore, never read and
    written back by application code.
    """

    __tablename__ = "sequence_counters"

    name: str = Field(primary_key=True, max_length=64)
    value: int = Field(sa_column=Column(BigInteger, nullable=False))
