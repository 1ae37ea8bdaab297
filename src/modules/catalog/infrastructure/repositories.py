"""Catalog repository implementations."""

from typing import Any

from sqlalchemy import ColumnElement, and_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from src.modules.catalog.domain.entities import (
    Category,
    ToneModel,
    ToneModelListing,
    ToneModelQuery,
)
from src.modules.catalog.domain.repository import CategoryRepository, ToneModelRepository
from src.modules.catalog.infrastructure.mappers import CategoryMapper, ToneModelMapper
from src.modules.catalog.infrastructure.models import (
    CategoryModel,
    ProfileModel,
    ToneModelModel,
)
from src.modules.listing.domain.entities import SortBy


def _listable() -> tuple[ColumnElement[bool], ...]:
    return (
        col(ToneModelModel.is_deleted).is_(False),
        col(ToneModelModel.active).is_(True),
        col(ToneModelModel.private).is_(False),
    )


class PostgreSQLCategoryRepository(CategoryRepository):
    """PostgreSQL category repository implementation."""

    def __init__(self, session: AsyncSession, mapper: CategoryMapper):
        self.session = session
        self.mapper = mapper

    async def list_all(self) -> list[Category]:
        result = await self.session.execute(select(CategoryModel))
        return self.mapper.to_domain_list(result.scalars().all())

    async def count_listable_by_category(self) -> list[tuple[Category, int]]:
        statement = (
            select(CategoryModel, func.count(col(ToneModelModel.id)).label("model_count"))
            .outerjoin(
                ToneModelModel,
                and_(ToneModelModel.category_id == CategoryModel.id, *_listable()),
            )
            .group_by(col(CategoryModel.id))
        )
        result = await self.session.execute(statement)
        return [
            (self.mapper.to_domain(row.CategoryModel), row.model_count or 0)
            for row in result.all()
        ]


class PostgreSQLToneModelRepository(ToneModelRepository):
    """PostgreSQL tone model repository implementation."""

    def __init__(
        self,
        session: AsyncSession,
        mapper: ToneModelMapper,
        category_mapper: CategoryMapper,
    ):
        self.session = session
        self.mapper = mapper
        self.category_mapper = category_mapper

    async def get_by_id(self, model_id: str) -> ToneModel | None:
        statement = select(ToneModelModel).where(
            ToneModelModel.id == model_id,
            col(ToneModelModel.is_deleted).is_(False),
        )
        result = await self.session.execute(statement)
        model = result.scalar_one_or_none()
        return self.mapper.to_domain(model) if model else None

    async def soft_delete(self, model_id: str) -> bool:
        statement = select(ToneModelModel).where(
            ToneModelModel.id == model_id,
            col(ToneModelModel.is_deleted).is_(False),
        )
        result = await self.session.execute(statement)
        model = result.scalar_one_or_none()
        if not model:
            return False

        model.soft_delete()
        self.session.add(model)
        await self.session.flush()
        return True

    async def list_page(self, query: ToneModelQuery) -> tuple[list[ToneModelListing], int]:
        conditions = list(_listable())
        if query.category_id is not None:
            conditions.append(ToneModelModel.category_id == query.category_id)
        if query.tag:
            conditions.append(col(ToneModelModel.tags).contains([query.tag]))
        if query.username:
            conditions.append(ProfileModel.username == query.username)

        count_statement = (
            select(func.count())
            .select_from(ToneModelModel)
            .join(ProfileModel, ProfileModel.id == ToneModelModel.profile_id)
            .where(*conditions)
        )
        total = (await self.session.execute(count_statement)).scalar_one() or 0

        sort_column = (
            col(ToneModelModel.favorite_count)
            if query.sort_by == SortBy.POPULAR
            else col(ToneModelModel.created_at)
        )
        statement = (
            select(ToneModelModel, ProfileModel.username, CategoryModel)
            .join(ProfileModel, ProfileModel.id == ToneModelModel.profile_id)
            .join(CategoryModel, CategoryModel.id == ToneModelModel.category_id)
            .where(*conditions)
            .order_by(
                sort_column.asc() if query.ascending else sort_column.desc(),
                col(ToneModelModel.id),
            )
            .offset(query.offset)
            .limit(query.page_size)
        )
        result = await self.session.execute(statement)
        return [self._to_listing(row) for row in result.all()], total

    async def list_by_profile(self, profile_id: str) -> list[ToneModelListing]:
        statement = (
            select(ToneModelModel, ProfileModel.username, CategoryModel)
            .join(ProfileModel, ProfileModel.id == ToneModelModel.profile_id)
            .join(CategoryModel, CategoryModel.id == ToneModelModel.category_id)
            .where(
                ToneModelModel.profile_id == profile_id,
                col(ToneModelModel.is_deleted).is_(False),
            )
            .order_by(col(ToneModelModel.created_at).desc())
        )
        result = await self.session.execute(statement)
        return [self._to_listing(row) for row in result.all()]

    def _to_listing(self, row: Any) -> ToneModelListing:
        model, username, category = row
        return ToneModelListing(
            model=self.mapper.to_domain(model),
            username=username,
            category=self.category_mapper.to_domain(category),
        )
