"""Classification of IntegrityErrors raised on flush/commit."""

import re
from dataclasses import dataclass

from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError

# SQLite: "UNIQUE constraint failed: applications.application_number"
_SQLITE_UNIQUE = re.compile(r"unique constraint failed: (?P<columns>[\w.]+(?:, [\w.]+)*)", re.IGNORECASE)
# PostgreSQL: 'Key (application_number)=(260001) already exists.'
_POSTGRES_KEY = re.compile(r"Key \((?P<columns>[^)]*)\)=\((?P<value>[^)]*)\) already exists")
_POSTGRES_UNIQUE = re.compile(r'duplicate key value violates unique constraint "[^"]+"')


@dataclass(frozen=True)
class UniqueViolation:
    """Field and, where the database reports it, value of a unique violation."""

    field: str
    value: str | None = None


def _error_text(error: IntegrityError) -> str:
    return str(error.orig if error.orig is not None else error)


def is_unique_violation(error: IntegrityError, constraint: UniqueConstraint) -> bool:
    """Check whether `error` was raised by the given unique constraint.

    PostgreSQL quotes the constraint name in the message; SQLite lists the
    constrained columns instead ("UNIQUE constraint failed: table.column").
    """
    if not constraint.name:
        raise ValueError("UniqueConstraint must have a name for conflict detection.")

    error_str = _error_text(error).lower()
    if f'"{constraint.name}"'.lower() in error_str:
        return True

    table = constraint.table.name
    columns = ", ".join(f"{table}.{column.name}" for column in constraint.columns)
    return f"unique constraint failed: {columns}".lower() in error_str


def describe_unique_violation(error: IntegrityError) -> UniqueViolation | None:
    """Field and value behind a unique violation, or None for other integrity errors."""
    text = _error_text(error)

    match = _SQLITE_UNIQUE.search(text)
    if match:
        # SQLite names columns as table.column and does not report the value
        columns = [column.rsplit(".", 1)[-1] for column in match["columns"].split(", ")]
        return UniqueViolation(field=", ".join(columns))

    match = _POSTGRES_KEY.search(text)
    if match:
        return UniqueViolation(field=match["columns"], value=match["value"])
    if _POSTGRES_UNIQUE.search(text):
        return UniqueViolation(field="unknown")
    return None
