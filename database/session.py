"""
Engine and per-request sessions for the accounts database.

One request gets one session: it commits when the handler returns cleanly
and rolls back on any exception, so a failed request writes nothing.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from config.settings import config
from database.models import Base

engine = create_async_engine(config.database_url, pool_pre_ping=True)

async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create the users and products tables if they are missing."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
