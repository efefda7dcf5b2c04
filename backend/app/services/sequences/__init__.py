"""Monotonic number sequences backed by the sequence_counters table."""

from app.services.sequences.allocator import SequenceAllocator, build_sequence_allocator
from app.services.sequences.counter_store import CounterStore, SqlCounterStore

__all__ = [
    "CounterStore",
    "SequenceAllocator",
    "SqlCounterStore",
    "build_sequence_allocator",
]
