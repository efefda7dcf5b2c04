"""Programme catalogue model."""

from sqlmodel import Field, SQLModel


class Program(SQLModel, table=True):
    """A programme candidates can apply for."""

    __tablename__ = "programs"

    id: int | None = Field(default=None, primary_key=True)
    program_code: str = Field(unique=True, index=True)
    program_name: str
    department_code: str = Field(index=True)
    department_name: str | None = None
    type: str | None = None  # "Arts" or "Sciences"
    program_type: str | None = None  # "UG" or "PG"
    stream: str | None = None  # "Aided" or "Self-Financed"
    shift: str | None = None  # "Shift-1" or "Shift-2"
    special: str | None = None  # e.g. "AICTE"
    show: bool = True
    sanctioned_strength: int | None = None
