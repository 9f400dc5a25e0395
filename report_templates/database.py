"""
Database Connection Management

SQLAlchemy async engine, session factory and schema creation.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from .logging_config import get_logger
from .models import Base

logger = get_logger(__name__)


def build_engine(database_url: str, debug: bool = False) -> AsyncEngine:
    """
    Create the async engine for ``database_url``

    SQLite files get no connection pooling; server databases get a pool.
    """
    engine_kwargs = {
        "echo": debug,  # Log SQL queries in debug mode
        "pool_pre_ping": True,
    }

    if database_url.startswith("sqlite") or debug:
        engine_kwargs["poolclass"] = NullPool
    else:
        engine_kwargs["pool_size"] = 20
        engine_kwargs["max_overflow"] = 40

    return create_async_engine(database_url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all registry tables that do not exist yet"""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready", url=engine.url.render_as_string(hide_password=True))
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise
