"""Listing domain models: the URL-addressable view state and server page data."""

from collections.abc import Iterable, Iterator
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.modules.listing.domain.exceptions import InvalidCategorySetError

ALL_FILTER_SLUG = "all"
DEFAULT_SORT_DIRECTION = "desc"


class SortBy(str, Enum):
    """Listing sort order."""

    NEWEST = "newest"
    POPULAR = "popular"


class ViewState(BaseModel):
    """What is being browsed, exactly as addressable from the URL.

    ``page`` is 1-based; pagination arithmetic works on ``page - 1``.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1, description="页码（从1开始）")
    filter_slug: str = Field(default=ALL_FILTER_SLUG, description="分类 slug")
    sort_by: SortBy = Field(default=SortBy.NEWEST, description="排序方式")
    sort_direction: str = Field(default=DEFAULT_SORT_DIRECTION, description="排序方向")
    tags: str | None = Field(default=None, description="标签搜索（原样使用）")
    username: str | None = Field(default=None, description="限定某个作者")

    def with_changes(self, **changes: object) -> "ViewState":
        """Return a validated copy with ``changes`` applied."""
        return ViewState.model_validate({**self.model_dump(), **changes})

    @property
    def page_index(self) -> int:
        return self.page - 1


class CategoryOption(BaseModel):
    """One selectable category."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    slug: str


ALL_CATEGORY = CategoryOption(id=0, title="All", slug=ALL_FILTER_SLUG)


class CategorySet:
    """Ordered category options, always led by the synthetic "All" entry."""

    def __init__(self, options: Iterable[CategoryOption]):
        self._options = tuple(options)
        if not self._options or self._options[0] != ALL_CATEGORY:
            raise InvalidCategorySetError("Category set must start with 'All'")

        self._by_slug: dict[str, CategoryOption] = {}
        self._by_id: dict[int, CategoryOption] = {}
        for option in self._options:
            if option.slug in self._by_slug:
                raise InvalidCategorySetError(f"Duplicate category slug '{option.slug}'")
            if option.id in self._by_id:
                raise InvalidCategorySetError(f"Duplicate category id {option.id}")
            self._by_slug[option.slug] = option
            self._by_id[option.id] = option

    @classmethod
    def from_categories(cls, categories: Iterable[CategoryOption]) -> "CategorySet":
        """Prepend "All" to the catalog categories, sorted by title."""
        ordered = sorted(categories, key=lambda c: (c.title.lower(), c.slug))
        for category in ordered:
            if category.id == ALL_CATEGORY.id:
                raise InvalidCategorySetError("Category id 0 is reserved for 'All'")
        return cls([ALL_CATEGORY, *ordered])

    @classmethod
    def default(cls) -> "CategorySet":
        return cls([ALL_CATEGORY])

    def by_slug(self, slug: str | None) -> CategoryOption | None:
        if slug is None:
            return None
        return self._by_slug.get(slug)

    def by_id(self, category_id: int) -> CategoryOption | None:
        return self._by_id.get(category_id)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    def __iter__(self) -> Iterator[CategoryOption]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"CategorySet({[o.slug for o in self._options]!r})"


class CategoryCount(BaseModel):
    """Aggregate count row, e.g. ``{"name": "amps", "count": 120}``."""

    model_config = ConfigDict(frozen=True)

    name: str
    count: int = Field(ge=0)


class ListingItem(BaseModel):
    """One catalog row as delivered by the data layer."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    category: CategoryOption | None = None
    profile_id: str
    username: str | None = None
    favorite_count: int = 0
    created_at: datetime


class PageResult(BaseModel):
    """One server-computed page plus its total and echoed parameters.

    Replaced wholesale on every fetch, never patched.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[ListingItem, ...] = ()
    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1, description="服务端确认的页码（从1开始）")
    page_size: int = Field(default=20, gt=0)
    sort_by: SortBy = SortBy.NEWEST
    sort_direction: str = DEFAULT_SORT_DIRECTION
    categories: tuple[CategoryOption, ...] = ()
    filter: str = ALL_FILTER_SLUG

    def echoes(self, view_state: ViewState) -> bool:
        """True when this page was computed for ``view_state``'s page/filter/sort."""
        return (
            self.page == view_state.page
            and self.filter == view_state.filter_slug
            and self.sort_by == view_state.sort_by
        )
