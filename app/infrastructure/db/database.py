"""
Database Configuration
SQLAlchemy async setup for PostgreSQL (SQLite in tests)
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


def async_database_url(url: str) -> str:
    """Convert postgres:// and postgresql:// to postgresql+asyncpg://"""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """Create the async engine on first use"""
    global _engine
    if _engine is None:
        url = async_database_url(settings.DATABASE_URL)
        pool_options = {}
        if not url.startswith("sqlite"):
            pool_options = dict(pool_size=10, max_overflow=20, pool_timeout=30, pool_recycle=3600)
        _engine = create_async_engine(url, echo=settings.DEBUG, **pool_options)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Session factory dependency.

    The dashboard fans out queries concurrently and an AsyncSession must not
    be shared between tasks, so repositories take the factory, not a session.
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False
        )
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session
    Use in FastAPI routes as:
    async def my_route(db: AsyncSession = Depends(get_db))
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Initialize database (create tables)"""
    if not settings.AUTO_CREATE_TABLES:
        return
    async with get_engine().begin() as conn:
        # Import all models here to ensure they're registered
        from app.infrastructure.db import models  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def close_db():
    """Close database connections"""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
