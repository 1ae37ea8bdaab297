"""Async engine, request-scoped sessions and database probes."""

from collections.abc import AsyncGenerator

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from src.core.config import settings
from src.core.infrastructure.health import ComponentStatus, DatabaseHealth

CATALOG_TABLES = ("profiles", "categories", "tone_models")

async_engine = create_async_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=settings.ENVIRONMENT == "local" and settings.LOG_LEVEL == "DEBUG",
    pool_pre_ping=True,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session wrapped in one transaction; commit on success."""
    async with AsyncSession(async_engine, expire_on_commit=False) as session:
        async with session.begin():
            yield session


async def init_db() -> None:
    """Fail startup early when PostgreSQL is unreachable."""
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database unreachable at startup: {e}")
        raise
    logger.info("Database connection established")


async def check_db_health() -> DatabaseHealth:
    """Report server version and which catalog tables are not migrated yet."""
    try:
        async with async_engine.connect() as conn:
            version = (await conn.execute(text("SHOW server_version"))).scalar()
            missing = [
                table
                for table in CATALOG_TABLES
                if (
                    await conn.execute(
                        text("SELECT to_regclass(:name)"), {"name": f"public.{table}"}
                    )
                ).scalar()
                is None
            ]
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        return DatabaseHealth(status=ComponentStatus.DOWN, error=str(e))

    if missing:
        logger.warning(f"Catalog tables not migrated: {', '.join(missing)}")
    return DatabaseHealth(status=ComponentStatus.UP, version=version, missing_tables=missing)
