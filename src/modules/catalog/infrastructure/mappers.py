"""Catalog entity-model mappers."""

from src.core.infrastructure.database.mapper import BaseMapper
from src.modules.catalog.domain.entities import Category, ToneModel
from src.modules.catalog.infrastructure.models import CategoryModel, ToneModelModel


class CategoryMapper(BaseMapper[Category, CategoryModel]):
    def to_domain(self, model: CategoryModel) -> Category:
        return Category(id=model.id, title=model.title, slug=model.slug)


class ToneModelMapper(BaseMapper[ToneModel, ToneModelModel]):
    """Tone model entity-model mapper."""

    def to_domain(self, model: ToneModelModel) -> ToneModel:
        return ToneModel(
            id=model.id,
            profile_id=model.profile_id,
            category_id=model.category_id,
            title=model.title,
            description=model.description,
            tags=list(model.tags or []),
            filename=model.filename,
            private=model.private,
            active=model.active,
            favorite_count=model.favorite_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
            is_deleted=model.is_deleted,
        )
