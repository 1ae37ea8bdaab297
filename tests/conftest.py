"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不依赖外部服务，仓储使用内存实现）

使用方法：
    # 运行所有测试
    uv run pytest

    # 只运行单元测试
    uv run pytest tests/unit/

    # 运行带覆盖率
    uv run pytest --cov=src --cov-report=html
"""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.core.config import Settings
from src.modules.catalog.domain.entities import (
    Category,
    ToneModel,
    ToneModelListing,
    ToneModelQuery,
)
from src.modules.catalog.domain.repository import CategoryRepository, ToneModelRepository
from src.modules.listing.domain.entities import (
    CategoryOption,
    CategorySet,
    ListingItem,
    PageResult,
    SortBy,
)

BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)

# ============================================
# 配置 Fixtures
# ============================================


@pytest.fixture
def test_settings() -> Settings:
    """测试环境配置。"""
    return Settings(
        ENVIRONMENT="local",
        POSTGRES_SERVER="localhost",
        POSTGRES_PORT=5432,
        POSTGRES_USER="postgres",
        POSTGRES_PASSWORD="postgres",
        POSTGRES_DB="tonehunt_test",
        SECRET_KEY="test-secret-key-for-testing-only",
    )


# ============================================
# Listing Fixtures
# ============================================


@pytest.fixture
def category_options() -> list[CategoryOption]:
    """目录分类（未排序，模拟服务端返回）。"""
    return [
        CategoryOption(id=2, title="Pedal", slug="pedal"),
        CategoryOption(id=1, title="Amp", slug="amp"),
        CategoryOption(id=3, title="Full Rig", slug="full-rig"),
    ]


@pytest.fixture
def category_set(category_options: list[CategoryOption]) -> CategorySet:
    return CategorySet.from_categories(category_options)


@pytest.fixture
def make_item() -> Callable[..., ListingItem]:
    """ListingItem 工厂。"""

    def _make(index: int, profile_id: str = "profile-1", **overrides: Any) -> ListingItem:
        values: dict[str, Any] = {
            "id": f"model-{index}",
            "title": f"Model {index}",
            "profile_id": profile_id,
            "username": "tonesmith",
            "created_at": BASE_TIME + timedelta(minutes=index),
        }
        values.update(overrides)
        return ListingItem(**values)

    return _make


@pytest.fixture
def make_page(
    category_options: list[CategoryOption],
    make_item: Callable[..., ListingItem],
) -> Callable[..., PageResult]:
    """PageResult 工厂：按 total/page/page_size 生成当前页条目。"""

    def _make(
        total: int = 45,
        page: int = 1,
        page_size: int = 20,
        filter: str = "all",
        sort_by: SortBy = SortBy.NEWEST,
        profile_id: str = "profile-1",
    ) -> PageResult:
        start = (page - 1) * page_size
        count = max(0, min(page_size, total - start))
        return PageResult(
            items=tuple(make_item(start + i, profile_id=profile_id) for i in range(count)),
            total=total,
            page=page,
            page_size=page_size,
            sort_by=sort_by,
            categories=tuple(category_options),
            filter=filter,
        )

    return _make


# ============================================
# Catalog 内存仓储
# ============================================


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory category repository for tests."""

    def __init__(
        self,
        categories: list[Category],
        models: dict[str, ToneModel] | None = None,
    ) -> None:
        self.categories = categories
        self.models = models if models is not None else {}

    async def list_all(self) -> list[Category]:
        return list(self.categories)

    async def count_listable_by_category(self) -> list[tuple[Category, int]]:
        return [
            (
                category,
                sum(
                    1
                    for model in self.models.values()
                    if model.category_id == category.id and model.is_listable()
                ),
            )
            for category in self.categories
        ]


class InMemoryToneModelRepository(ToneModelRepository):
    """In-memory tone model repository for tests."""

    def __init__(
        self,
        models: dict[str, ToneModel] | None = None,
        categories: list[Category] | None = None,
        usernames: dict[str, str] | None = None,
    ) -> None:
        self.models = models if models is not None else {}
        self.categories = {c.id: c for c in categories or []}
        self.usernames = usernames or {}
        self.last_query: ToneModelQuery | None = None

    async def get_by_id(self, model_id: str) -> ToneModel | None:
        model = self.models.get(model_id)
        if model is None or model.is_deleted:
            return None
        return model

    async def soft_delete(self, model_id: str) -> bool:
        model = self.models.get(model_id)
        if model is None:
            return False
        model.is_deleted = True
        return True

    async def list_page(self, query: ToneModelQuery) -> tuple[list[ToneModelListing], int]:
        self.last_query = query
        rows = [
            model
            for model in self.models.values()
            if model.is_listable()
            and (query.category_id is None or model.category_id == query.category_id)
            and (not query.tag or query.tag in model.tags)
            and (not query.username or self.usernames.get(model.profile_id) == query.username)
        ]
        if query.sort_by == SortBy.POPULAR:
            rows.sort(key=lambda m: m.favorite_count, reverse=not query.ascending)
        else:
            rows.sort(key=lambda m: m.created_at, reverse=not query.ascending)

        page = rows[query.offset : query.offset + query.page_size]
        return [self._listing(model) for model in page], len(rows)

    async def list_by_profile(self, profile_id: str) -> list[ToneModelListing]:
        rows = [
            model
            for model in self.models.values()
            if model.profile_id == profile_id and not model.is_deleted
        ]
        rows.sort(key=lambda m: m.created_at, reverse=True)
        return [self._listing(model) for model in rows]

    def _listing(self, model: ToneModel) -> ToneModelListing:
        return ToneModelListing(
            model=model,
            username=self.usernames.get(model.profile_id),
            category=self.categories.get(model.category_id),
        )


@pytest.fixture
def catalog_categories() -> list[Category]:
    return [
        Category(id=1, title="Amp", slug="amp"),
        Category(id=2, title="Pedal", slug="pedal"),
        Category(id=3, title="Full Rig", slug="full-rig"),
    ]


@pytest.fixture
def tone_models() -> dict[str, ToneModel]:
    """示例模型：3 个公开 amp、1 个公开 pedal、各一个隐藏/私有/已删除。"""
    models = [
        ToneModel(
            id="amp-1",
            profile_id="profile-1",
            category_id=1,
            title="Plexi Crunch",
            tags=["vintage", "crunch"],
            favorite_count=5,
            created_at=BASE_TIME,
        ),
        ToneModel(
            id="amp-2",
            profile_id="profile-2",
            category_id=1,
            title="JCM Lead",
            tags=["lead"],
            favorite_count=12,
            created_at=BASE_TIME + timedelta(days=1),
        ),
        ToneModel(
            id="amp-3",
            profile_id="profile-1",
            category_id=1,
            title="Clean Twin",
            tags=["clean", "vintage"],
            favorite_count=1,
            created_at=BASE_TIME + timedelta(days=2),
        ),
        ToneModel(
            id="pedal-1",
            profile_id="profile-2",
            category_id=2,
            title="Fuzz Face",
            tags=["vintage-fuzz"],
            favorite_count=7,
            created_at=BASE_TIME + timedelta(days=3),
        ),
        ToneModel(
            id="hidden-1",
            profile_id="profile-1",
            category_id=1,
            title="Work In Progress",
            active=False,
            created_at=BASE_TIME + timedelta(days=4),
        ),
        ToneModel(
            id="private-1",
            profile_id="profile-1",
            category_id=2,
            title="My Secret Drive",
            private=True,
            created_at=BASE_TIME + timedelta(days=5),
        ),
        ToneModel(
            id="deleted-1",
            profile_id="profile-1",
            category_id=1,
            title="Gone",
            is_deleted=True,
            created_at=BASE_TIME + timedelta(days=6),
        ),
    ]
    return {model.id: model for model in models}


@pytest.fixture
def usernames() -> dict[str, str]:
    return {"profile-1": "tonesmith", "profile-2": "ampwizard"}


@pytest.fixture
def tone_model_repo(
    tone_models: dict[str, ToneModel],
    catalog_categories: list[Category],
    usernames: dict[str, str],
) -> InMemoryToneModelRepository:
    return InMemoryToneModelRepository(tone_models, catalog_categories, usernames)


@pytest.fixture
def category_repo(
    catalog_categories: list[Category],
    tone_models: dict[str, ToneModel],
) -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository(catalog_categories, tone_models)


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
async def async_client(
    tone_model_repo: InMemoryToneModelRepository,
    category_repo: InMemoryCategoryRepository,
) -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（用于 API 测试），仓储替换为内存实现。"""
    from main import app
    from src.modules.catalog.application import dependencies as catalog_app_deps

    overrides = dict(app.dependency_overrides)
    app.dependency_overrides[catalog_app_deps.get_tone_model_repository] = (
        lambda: tone_model_repo
    )
    app.dependency_overrides[catalog_app_deps.get_category_repository] = (
        lambda: category_repo
    )

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    # 恢复依赖覆盖
    app.dependency_overrides.clear()
    app.dependency_overrides.update(overrides)
