"""
Async SQLAlchemy engine and session factory for the knowledge base store.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from loguru import logger

from campus_assist.config import settings


def _engine_options(url: str) -> dict:
    options = {"echo": settings.DEBUG}
    # aiosqlite uses a static pool; sizing only applies to server databases
    if not url.startswith("sqlite"):
        options.update({"pool_size": 20, "max_overflow": 10, "pool_pre_ping": True})
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    """FastAPI dependency: one session per request, committed on success."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create the questions table if it does not exist yet."""
    from campus_assist.models.entities import KnowledgeQuestion  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Knowledge base ready ({engine.url.drivername})")


async def dispose_db():
    await engine.dispose()
