from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker
)
from sqlalchemy import event
from sqlalchemy.orm import declarative_base
import logging

from ..core.config import settings

logger = logging.getLogger(__name__)

# SQLAlchemy declarative base
Base = declarative_base()


def build_engine(database_url: str, **kwargs):
    """Create the async engine; SQLite gets foreign keys switched on."""
    is_sqlite = database_url.startswith("sqlite")
    if not is_sqlite:
        kwargs.setdefault("pool_pre_ping", True)
        kwargs.setdefault("pool_size", 5)
        kwargs.setdefault("max_overflow", 10)
        kwargs.setdefault("pool_recycle", 3600)

    async_engine = create_async_engine(database_url, echo=settings.DATABASE_ECHO, **kwargs)

    if is_sqlite:
        @event.listens_for(async_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return async_engine


engine = build_engine(settings.DATABASE_URL)

# Async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False
)


async def get_db() -> AsyncSession:  # type: ignore
    """
    Request-scoped session for FastAPI dependency injection.
    Commit/rollback is decided by the service and route layers.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error occurred, rolling back: {e}")
            raise
        finally:
            await session.close()


async def init_db(bind=None):
    """Create all tables."""
    # models register themselves on Base.metadata when imported
    from .. import models  # noqa: F401

    bind = bind or engine
    try:
        async with bind.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


async def close_db():
    """Dispose pooled connections on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")

