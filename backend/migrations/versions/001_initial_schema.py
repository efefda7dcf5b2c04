"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # Counters behind registration and application numbers
    op.create_table(
        "sequence_counters",
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("value", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )

    op.create_table(
        "programs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("program_code", sa.String(), nullable=False),
        sa.Column("program_name", sa.String(), nullable=False),
        sa.Column("department_code", sa.String(), nullable=False),
        sa.Column("department_name", sa.String(), nullable=True),
        sa.Column("type", sa.String(), nullable=True),
        sa.Column("program_type", sa.String(), nullable=True),
        sa.Column("stream", sa.String(), nullable=True),
        sa.Column("shift", sa.String(), nullable=True),
        sa.Column("special", sa.String(), nullable=True),
        sa.Column("show", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sanctioned_strength", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_programs_program_code"), "programs", ["program_code"], unique=True)
    op.create_index(op.f("ix_programs_department_code"), "programs", ["department_code"], unique=False)

    op.create_table(
        "candidates",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("registration_number", sa.BigInteger(), nullable=False),
        sa.Column("academic_year", sa.String(), nullable=False),
        sa.Column("admission_status", sa.String(length=32), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("gender", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("nationality", sa.String(), nullable=False),
        sa.Column("community", sa.String(), nullable=True),
        sa.Column("programme_type", sa.String(length=32), nullable=False),
        sa.Column("payment_amount", sa.Integer(), nullable=False),
        sa.Column("payment_status", sa.String(length=32), nullable=False),
        sa.Column("transaction_id", sa.String(), nullable=True),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("payment_method", sa.String(), nullable=True),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("registration_number", name="uq_candidates_registration_number"),
    )
    op.create_index(op.f("ix_candidates_phone"), "candidates", ["phone"], unique=False)

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("candidate_id", sa.Uuid(), nullable=False),
        sa.Column("application_number", sa.BigInteger(), nullable=False),
        sa.Column("application_type", sa.String(length=32), nullable=False),
        sa.Column("program_code", sa.String(), nullable=False),
        sa.Column("program_name", sa.String(), nullable=False),
        sa.Column("stream", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("shift", sa.String(), nullable=True),
        sa.Column("preference_order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["candidate_id"], ["candidates.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("application_number"),
        sa.UniqueConstraint("candidate_id", "preference_order", name="uq_applications_candidate_preference"),
    )
    op.create_index(op.f("ix_applications_candidate_id"), "applications", ["candidate_id"], unique=False)
    op.create_index(op.f("ix_applications_program_code"), "applications", ["program_code"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_applications_program_code"), table_name="applications")
    op.drop_index(op.f("ix_applications_candidate_id"), table_name="applications")
    op.drop_table("applications")
    op.drop_index(op.f("ix_candidates_phone"), table_name="candidates")
    op.drop_table("candidates")
    op.drop_index(op.f("ix_programs_department_code"), table_name="programs")
    op.drop_index(op.f("ix_programs_program_code"), table_name="programs")
    op.drop_table("programs")
    op.drop_table("sequence_counters")
