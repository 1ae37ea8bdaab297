"""Catalog module application dependencies.

Provides services and handlers without importing infrastructure.
"""

from typing import NoReturn

from fastapi import Depends

from src.modules.catalog.application.handlers import DeleteToneModelHandler
from src.modules.catalog.application.services import (
    CatalogQueryService,
    MyModelsQueryService,
)
from src.modules.catalog.domain.repository import CategoryRepository, ToneModelRepository


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_tone_model_repository() -> ToneModelRepository:
    _missing_dependency("ToneModelRepository")


async def get_category_repository() -> CategoryRepository:
    _missing_dependency("CategoryRepository")


async def get_catalog_query_service(
    tone_model_repository: ToneModelRepository = Depends(get_tone_model_repository),
    category_repository: CategoryRepository = Depends(get_category_repository),
) -> CatalogQueryService:
    return CatalogQueryService(
        tone_model_repository=tone_model_repository,
        category_repository=category_repository,
    )


async def get_my_models_query_service(
    tone_model_repository: ToneModelRepository = Depends(get_tone_model_repository),
) -> MyModelsQueryService:
    return MyModelsQueryService(tone_model_repository=tone_model_repository)


async def get_delete_tone_model_handler(
    tone_model_repository: ToneModelRepository = Depends(get_tone_model_repository),
) -> DeleteToneModelHandler:
    return DeleteToneModelHandler(tone_model_repository=tone_model_repository)
