"""Catalog module infrastructure dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.infrastructure.database.session import get_db_session
from src.modules.catalog.infrastructure.mappers import CategoryMapper, ToneModelMapper
from src.modules.catalog.infrastructure.repositories import (
    PostgreSQLCategoryRepository,
    PostgreSQLToneModelRepository,
)


def get_category_mapper() -> CategoryMapper:
    return CategoryMapper()


def get_tone_model_mapper() -> ToneModelMapper:
    return ToneModelMapper()


async def get_category_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: CategoryMapper = Depends(get_category_mapper),
) -> PostgreSQLCategoryRepository:
    return PostgreSQLCategoryRepository(session, mapper)


async def get_tone_model_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: ToneModelMapper = Depends(get_tone_model_mapper),
    category_mapper: CategoryMapper = Depends(get_category_mapper),
) -> PostgreSQLToneModelRepository:
    return PostgreSQLToneModelRepository(session, mapper, category_mapper)
