"""Catalog API schemas.

Listing payload field names match the listing engine's PageResult so the
HTTP client can validate the ``data`` envelope directly.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.modules.catalog.domain.entities import ToneModelStatus


class CategoryOptionResponse(BaseModel):
    id: int = Field(..., description="分类 ID")
    title: str = Field(..., description="分类名称")
    slug: str = Field(..., description="URL slug")


class ListingItemResponse(BaseModel):
    """One public catalog row."""

    id: str = Field(..., description="模型 ID")
    title: str = Field(..., description="标题")
    description: str | None = Field(None, description="描述")
    tags: list[str] = Field(default_factory=list, description="标签")
    category: CategoryOptionResponse | None = Field(None, description="分类")
    profile_id: str = Field(..., description="上传者 profile ID")
    username: str | None = Field(None, description="上传者用户名")
    favorite_count: int = Field(0, description="收藏数")
    created_at: datetime = Field(..., description="创建时间")
    is_owner: bool = Field(False, description="是否为当前用户的模型")


class CatalogPageResponse(BaseModel):
    """One listing page with its total and echoed parameters."""

    items: list[ListingItemResponse] = Field(default_factory=list, description="当前页条目")
    total: int = Field(..., description="筛选条件下的总数")
    page: int = Field(..., description="页码（从1开始）")
    page_size: int = Field(..., description="每页数量")
    sort_by: str = Field(..., description="排序方式")
    sort_direction: str = Field(..., description="排序方向")
    categories: list[CategoryOptionResponse] = Field(
        default_factory=list, description="全部分类"
    )
    filter: str = Field(..., description="生效的分类 slug")


class CategoryCountResponse(BaseModel):
    name: str = Field(..., description="复数 slug，如 amps")
    count: int = Field(..., description="可见模型数")


class MyModelResponse(BaseModel):
    """Owner's view of a tone model."""

    id: str
    title: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    filename: str | None = None
    private: bool
    active: bool
    status: ToneModelStatus
    category: CategoryOptionResponse | None = None
    created_at: datetime
    updated_at: datetime


class DeleteToneModelRequest(BaseModel):
    """Delete tone model request."""

    model_config = ConfigDict(
        populate_by_name=True,
        protected_namespaces=(),
        json_schema_extra={"example": {"modelId": "b2c4...", "profileId": "7f1e..."}},
    )

    model_id: str = Field(..., alias="modelId", min_length=1, description="模型 ID")
    profile_id: str = Field(..., alias="profileId", min_length=1, description="所有者 profile ID")
