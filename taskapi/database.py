"""
Database Connection Management

SQLAlchemy async engine and request-scoped session management.
"""

from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from taskapi.config import settings
from taskapi.logging_config import get_logger

logger = get_logger(__name__)

engine_kwargs = {
    "echo": settings.DEBUG,  # Log SQL queries in debug mode
    "pool_pre_ping": True,
}

if settings.DEBUG or not settings.DATABASE_URL.startswith("postgresql"):
    # pool_size and max_overflow are not applicable with NullPool
    engine_kwargs["poolclass"] = NullPool
else:
    engine_kwargs["pool_size"] = 20
    engine_kwargs["max_overflow"] = 40

engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for database sessions

    One session per request, released on every exit path.

    Usage:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """
    Initialize database connection

    Called on application startup.
    """
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection established", url=settings.DATABASE_URL.split("@")[-1])
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        raise


async def close_db() -> None:
    """
    Close database connection

    Called on application shutdown.
    """
    await engine.dispose()
    logger.info("Database connection closed")

