"""Database engine, session factory and the request-scoped session dependency."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cineroom.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide one session per request.

    The session is committed when the handler returns and rolled back if it
    raises, so a room's version bump and its booking rows are written
    together or not at all.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.warning("Request failed, database session rolled back")
            raise


async def ping(db: AsyncSession) -> bool:
    """Round-trip to the database; False if it cannot be reached."""
    try:
        await db.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as e:
        logger.error(f"Database unreachable: {e}")
        return False
    return True
