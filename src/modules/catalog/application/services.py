"""Catalog query services."""

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.catalog.application.models import MyModelData
from src.modules.catalog.domain.entities import (
    Category,
    ToneModelListing,
    ToneModelQuery,
)
from src.modules.catalog.domain.repository import CategoryRepository, ToneModelRepository
from src.modules.listing.domain.entities import (
    ALL_FILTER_SLUG,
    CategoryCount,
    CategoryOption,
    CategorySet,
    ListingItem,
    PageResult,
    ViewState,
)
from src.modules.listing.domain.exceptions import InvalidPageSizeError


def _to_option(category: Category | None) -> CategoryOption | None:
    if category is None:
        return None
    return CategoryOption(id=category.id, title=category.title, slug=category.slug)


def _to_listing_item(listing: ToneModelListing) -> ListingItem:
    model = listing.model
    return ListingItem(
        id=model.id,
        title=model.title,
        description=model.description,
        tags=list(model.tags),
        category=_to_option(listing.category),
        profile_id=model.profile_id,
        username=listing.username,
        favorite_count=model.favorite_count,
        created_at=model.created_at,
    )


class CatalogQueryService:
    """Public catalog pages and counts.

    Implements the listing engine's PageFetcher and CountsProvider ports
    in-process, so the same service backs the HTTP endpoints and any local
    listing session.
    """

    def __init__(
        self,
        tone_model_repository: ToneModelRepository,
        category_repository: CategoryRepository,
    ) -> None:
        self.tone_model_repo = tone_model_repository
        self.category_repo = category_repository
        self.logger = logger.bind(service="CatalogQueryService")

    async def category_set(self) -> CategorySet:
        categories = await self.category_repo.list_all()
        return CategorySet.from_categories(_to_option(c) for c in categories)

    async def fetch_page(self, view_state: ViewState, page_size: int) -> PageResult:
        """One page of listable models for ``view_state``.

        An unknown filter lists everything and is echoed back as "all". A page
        past the end comes back empty with the requested page number.
        """
        if page_size <= 0:
            raise InvalidPageSizeError(page_size)

        categories = await self.category_set()
        selected = categories.by_slug(view_state.filter_slug)
        if selected is None:
            self.logger.debug(f"Unknown filter '{view_state.filter_slug}', listing all")
        category_id = selected.id if selected and selected.slug != ALL_FILTER_SLUG else None
        sort_direction = "asc" if view_state.sort_direction == "asc" else "desc"

        query = ToneModelQuery(
            page=view_state.page,
            page_size=page_size,
            category_id=category_id,
            tag=view_state.tags,
            username=view_state.username,
            sort_by=view_state.sort_by,
            sort_direction=sort_direction,
        )
        listings, total = await self.tone_model_repo.list_page(query)

        result = PageResult(
            items=tuple(_to_listing_item(listing) for listing in listings),
            total=total,
            page=query.page,
            page_size=page_size,
            sort_by=query.sort_by,
            sort_direction=sort_direction,
            categories=tuple(option for option in categories if option.id != 0),
            filter=selected.slug if selected else ALL_FILTER_SLUG,
        )
        BusinessEvents.catalog_page_served(
            filter_slug=result.filter,
            sort_by=result.sort_by.value,
            page=result.page,
            total=result.total,
        )
        return result

    async def aggregate_counts(self) -> list[CategoryCount]:
        """Listable models per category, named by plural slug ("amps")."""
        rows = await self.category_repo.count_listable_by_category()
        return [
            CategoryCount(name=f"{category.slug}s", count=count)
            for category, count in sorted(rows, key=lambda row: row[0].id)
        ]


class MyModelsQueryService:
    """The caller's own models, hidden and private ones included."""

    def __init__(self, tone_model_repository: ToneModelRepository) -> None:
        self.tone_model_repo = tone_model_repository

    async def list_for_profile(self, profile_id: str) -> list[MyModelData]:
        listings = await self.tone_model_repo.list_by_profile(profile_id)
        return [
            MyModelData(
                id=listing.model.id,
                title=listing.model.title,
                description=listing.model.description,
                tags=list(listing.model.tags),
                filename=listing.model.filename,
                private=listing.model.private,
                active=listing.model.active,
                status=listing.model.status,
                category=_to_option(listing.category),
                created_at=listing.model.created_at,
                updated_at=listing.model.updated_at,
            )
            for listing in listings
        ]
