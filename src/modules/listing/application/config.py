"""Listing configuration."""

from pydantic import BaseModel, ConfigDict, Field

from src.core.config import settings


class ListingConfig(BaseModel):
    """Options for one listing view, validated once at construction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    page_size: int = Field(default=20, gt=0, description="每页数量")
    base_path: str = Field(default="/", min_length=1, description="列表页路径")
    show_filters: bool = Field(default=True, description="显示分类筛选")
    show_menu: bool = Field(default=True, description="显示排序菜单")
    abort_superseded: bool = Field(default=True, description="取消被覆盖的请求")
    range_displayed: int = Field(default=3, ge=1)
    margin_pages: int = Field(default=1, ge=0)

    @classmethod
    def from_settings(cls, **overrides: object) -> "ListingConfig":
        values: dict[str, object] = {
            "page_size": settings.MODELS_PAGE_SIZE,
            "base_path": settings.LISTING_BASE_PATH,
            "abort_superseded": settings.LISTING_ABORT_SUPERSEDED,
        }
        values.update(overrides)
        return cls.model_validate(values)
