"""
Database schema migration helpers.

Brings databases created by older releases up to the current schema.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from autoschedule.core.logger import setup_logger

logger = setup_logger(__name__)


async def run_migrations(engine: AsyncEngine) -> None:
    """
    Run all pending migrations.

    Older schedule_entries tables predate manual editing and lack the
    lock flags that regeneration depends on.
    """
    async with engine.begin() as conn:
        result = await conn.execute(text("PRAGMA table_info(schedule_entries)"))
        columns = {row[1] for row in result}

        if "is_manual" not in columns:
            await conn.execute(
                text("ALTER TABLE schedule_entries ADD COLUMN is_manual BOOLEAN DEFAULT 0")
            )
            logger.info("Added schedule_entries.is_manual")

        if "is_locked" not in columns:
            await conn.execute(
                text("ALTER TABLE schedule_entries ADD COLUMN is_locked BOOLEAN DEFAULT 0")
            )
            logger.info("Added schedule_entries.is_locked")
