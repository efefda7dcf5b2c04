#!/usr/bin/env python
"""Seed the programme catalogue from a JSON file.

Usage:
    python -m app.scripts.seed_programs programmes.json

The file holds a JSON array of programme objects. Existing programmes are
matched by program_code and updated in place.
"""

import asyncio
import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import click
import structlog
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from app.logging import setup_logging
from app.models.program import Program

logger = structlog.get_logger(__name__)


class ProgramSeed(BaseModel):
    """One programme entry of the seed file."""

    model_config = ConfigDict(extra="ignore")

    program_code: str
    program_name: str
    department_code: str
    department_name: str | None = None
    type: str | None = None
    program_type: str | None = None
    stream: str | None = None
    shift: str | None = None
    special: str | None = None
    show: bool = True
    sanctioned_strength: int | None = None


async def seed_programs(session: AsyncSession, entries: Iterable[ProgramSeed]) -> tuple[int, int]:
    """Upsert programmes by program_code. Returns (created, updated)."""
    seeds = {entry.program_code: entry for entry in entries}
    result = await session.execute(select(Program).where(col(Program.program_code).in_(list(seeds))))
    existing = {program.program_code: program for program in result.scalars().all()}

    created = updated = 0
    for code, seed in seeds.items():
        program = existing.get(code)
        if program is None:
            session.add(Program(**seed.model_dump()))
            created += 1
        else:
            for field, value in seed.model_dump().items():
                setattr(program, field, value)
            updated += 1

    await session.commit()
    return created, updated


def load_seed_file(path: Path) -> list[ProgramSeed]:
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise click.BadParameter("Seed file must contain a JSON array", param_hint="PATH")
    return [ProgramSeed.model_validate(item) for item in data]


async def _run(entries: list[ProgramSeed]) -> tuple[int, int]:
    from app.db import async_session_maker, dispose_engine

    try:
        async with async_session_maker() as session:
            return await seed_programs(session, entries)
    finally:
        await dispose_engine()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def main(path: Path) -> None:
    """Create or update programmes listed in PATH."""
    setup_logging()
    entries = load_seed_file(path)
    created, updated = asyncio.run(_run(entries))
    logger.info("Programmes seeded", file=str(path), created=created, updated=updated)


if __name__ == "__main__":
    main()
