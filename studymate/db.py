"""
StudyMate Database Layer
Async SQLAlchemy engine + SQLModel metadata for the relational store
(users, study plans, exams, performance records, weak topics).
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from studymate.config import settings
from studymate import models  # noqa: F401  (registers tables on the metadata)

logger = logging.getLogger("studymate")


def _get_connect_args() -> dict:
    """Get database-specific connection arguments."""
    if "sqlite" in settings.db_url:
        return {"check_same_thread": False}
    # PostgreSQL via asyncpg needs no special connect_args
    return {}


def _get_engine_options() -> dict:
    options = {
        "echo": False,
        "future": True,
        "pool_pre_ping": True,  # Verify connections before use
        "connect_args": _get_connect_args(),
    }
    if settings.env == "test":
        # each TestClient runs its own event loop; never share pooled connections
        options["poolclass"] = NullPool
    return options


engine = create_async_engine(settings.db_url, **_get_engine_options())

async_session = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def create_db_and_tables():
    """Initialize database schema."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("database_tables_created", extra={"db_url": settings.db_url})


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI endpoints.
    Provides a session that rolls back if the request handler raises.
    """
    session = async_session()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
