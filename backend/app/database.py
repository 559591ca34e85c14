"""Database engine, session factory, and declarative base.

A single request-scoped session dependency:
  - get_db()  → commits once the route returns, rolls back on any error

Sensor ingestion relies on this: the reading insert and the alert insert
share the session, so they are committed (or discarded) together.
"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _engine_kwargs(url: str) -> dict:
    # SQLite drivers use a static/singleton pool that rejects sizing args
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_kwargs(settings.database_url),
)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


class Base(DeclarativeBase):
    """Base class for every cold-chain table."""
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield a session for one request; commit on success."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
