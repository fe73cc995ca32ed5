# wodtracker/database.py
import logging
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from wodtracker.config import settings

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


@lru_cache
def get_engine() -> AsyncEngine:
    """Process-wide engine, created on first use and reused afterwards."""
    options = {"echo": settings.DATABASE_ECHO}
    if not settings.DATABASE_URL.startswith("sqlite"):
        options.update(pool_pre_ping=True, pool_recycle=300)

    engine = create_async_engine(settings.DATABASE_URL, **options)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


@lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,  # Manual control over when to flush
    )


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_sessionmaker()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
