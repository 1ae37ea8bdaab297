"""Catalog domain entities."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.core.domain.base_entity import BaseEntity
from src.modules.catalog.domain.exceptions import ToneModelAccessDeniedError
from src.modules.listing.domain.entities import DEFAULT_SORT_DIRECTION, SortBy


class ToneModelStatus(str, Enum):
    """Owner-facing publication status."""

    PUBLISHED = "Published"
    HIDDEN = "Hidden"


class Category(BaseModel):
    """Catalog category (amp, pedal, ...)."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int = Field(..., gt=0, description="分类 ID（0 保留给 All）")
    title: str = Field(..., description="分类名称")
    slug: str = Field(..., description="URL slug")


class ToneModel(BaseEntity):
    """User-submitted tone model."""

    profile_id: str = Field(..., description="上传者 profile ID")
    category_id: int = Field(..., description="分类 ID")
    title: str = Field(..., description="标题")
    description: str | None = Field(default=None, description="描述")
    tags: list[str] = Field(default_factory=list, description="标签")
    filename: str | None = Field(default=None, description="模型文件名")
    private: bool = Field(default=False, description="是否私有")
    active: bool = Field(default=True, description="是否发布")
    favorite_count: int = Field(default=0, ge=0, description="收藏数")

    @property
    def status(self) -> ToneModelStatus:
        return ToneModelStatus.PUBLISHED if self.active else ToneModelStatus.HIDDEN

    def is_listable(self) -> bool:
        """Shown in public listings: active, public and not deleted."""
        return self.active and not self.private and not self.is_deleted

    def is_owned_by(self, profile_id: str | None) -> bool:
        return profile_id is not None and self.profile_id == profile_id

    def delete_by(self, profile_id: str) -> None:
        """Soft delete on behalf of ``profile_id``; only the owner may."""
        if not self.is_owned_by(profile_id):
            raise ToneModelAccessDeniedError(self.id)
        self.mark_as_deleted()


class ToneModelListing(BaseModel):
    """A tone model with the author and category joined in."""

    model: ToneModel
    username: str | None = None
    category: Category | None = None


class ToneModelQuery(BaseModel):
    """Filters and ordering for one public listing page."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, gt=0)
    category_id: int | None = None
    tag: str | None = None
    username: str | None = None
    sort_by: SortBy = SortBy.NEWEST
    sort_direction: str = DEFAULT_SORT_DIRECTION

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def ascending(self) -> bool:
        return self.sort_direction == "asc"
