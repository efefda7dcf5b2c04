"""Tests for the programme seeding command."""

import json
from pathlib import Path

import click
import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.program import Program
from app.scripts.seed_programs import ProgramSeed, load_seed_file, seed_programs


async def test_seed_creates_then_updates(session: AsyncSession) -> None:
    entries = [
        ProgramSeed(program_code="UG-BSC-CS", program_name="B.Sc. Computer Science", department_code="CS"),
        ProgramSeed(program_code="UG-BA-ENG", program_name="B.A. English", department_code="ENG"),
    ]
    assert await seed_programs(session, entries) == (2, 0)

    renamed = ProgramSeed(
        program_code="UG-BSC-CS",
        program_name="B.Sc. Computer Science (Hons)",
        department_code="CS",
        show=False,
    )
    assert await seed_programs(session, [renamed]) == (0, 1)

    result = await session.execute(select(Program).where(Program.program_code == "UG-BSC-CS"))
    program = result.scalars().one()
    assert program.program_name == "B.Sc. Computer Science (Hons)"
    assert program.show is False


def test_load_seed_file(tmp_path: Path) -> None:
    path = tmp_path / "programs.json"
    path.write_text(
        json.dumps(
            [
                {
                    "program_code": "PG-MSC-PHY",
                    "program_name": "M.Sc. Physics",
                    "department_code": "PHY",
                    "sanctioned_strength": 40,
                    "notes": "ignored",
                }
            ]
        )
    )

    entries = load_seed_file(path)

    assert len(entries) == 1
    assert entries[0].sanctioned_strength == 40
    assert entries[0].show is True


def test_load_seed_file_requires_array(tmp_path: Path) -> None:
    path = tmp_path / "programs.json"
    path.write_text(json.dumps({"program_code": "PG-MSC-PHY"}))

    with pytest.raises(click.BadParameter):
        load_seed_file(path)
