# autevo/db/database.py
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from autevo.core.config import settings


def build_engine(url: str, **kwargs):
    """Create the async engine; pool sizing only applies to server databases"""
    if not url.startswith("sqlite"):
        kwargs.setdefault("pool_size", settings.DB_POOL_SIZE)
        kwargs.setdefault("max_overflow", settings.DB_MAX_OVERFLOW)
        kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url, echo=settings.DEBUG, **kwargs)


# Create async engine
engine = build_engine(settings.async_database_url)

# Create async session factory
async_session_local = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    async with async_session_local() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    """Initialize database (create tables)"""
    from autevo.db.base import Base
    # Import all models to ensure they're registered
    from autevo.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Close database connections"""
    await engine.dispose()
