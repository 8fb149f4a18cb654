from typing import AsyncIterator

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from studyaid.core.config import settings
from studyaid.core.logging import get_logger


logger = get_logger(__name__)

Base = declarative_base()


engine = create_async_engine(
    str(settings.postgres.connection_string),
    echo=settings.app.db_echo,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    expire_on_commit=False,
)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Request-scoped session; commits on success, rolls back on any error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("Session rolled back due to error: %s", type(e).__name__)
            raise
