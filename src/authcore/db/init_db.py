"""
authcore.db.init_db

DB initialization helper (dev/test convenience).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from authcore.db import models  # noqa: F401  # registers tables on Base.metadata
from authcore.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Production schemas are managed out of band.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
