"""Tests for catalog query services, deletion and entities."""

import pytest

from src.modules.catalog.application.commands import DeleteToneModelCommand
from src.modules.catalog.application.handlers import DeleteToneModelHandler
from src.modules.catalog.application.services import (
    CatalogQueryService,
    MyModelsQueryService,
)
from src.modules.catalog.domain.entities import ToneModel, ToneModelStatus
from src.modules.catalog.domain.exceptions import (
    ToneModelAccessDeniedError,
    ToneModelNotFoundError,
)
from src.modules.listing.domain.entities import SortBy, ViewState
from src.modules.listing.domain.exceptions import InvalidPageSizeError

pytestmark = pytest.mark.anyio


@pytest.fixture
def query_service(tone_model_repo, category_repo) -> CatalogQueryService:
    return CatalogQueryService(tone_model_repo, category_repo)


# ============================================
# Domain Entity Tests
# ============================================


class TestToneModelEntity:
    def test_listable(self) -> None:
        model = ToneModel(profile_id="p", category_id=1, title="Amp")
        assert model.is_listable() is True
        assert model.status == ToneModelStatus.PUBLISHED

    @pytest.mark.parametrize(
        "overrides",
        [{"active": False}, {"private": True}, {"is_deleted": True}],
    )
    def test_not_listable(self, overrides: dict) -> None:
        model = ToneModel(profile_id="p", category_id=1, title="Amp", **overrides)
        assert model.is_listable() is False

    def test_hidden_status(self) -> None:
        model = ToneModel(profile_id="p", category_id=1, title="Amp", active=False)
        assert model.status == ToneModelStatus.HIDDEN

    def test_delete_by_owner(self) -> None:
        model = ToneModel(profile_id="p", category_id=1, title="Amp")
        model.delete_by("p")
        assert model.is_deleted is True

    def test_delete_by_someone_else(self) -> None:
        model = ToneModel(profile_id="p", category_id=1, title="Amp")
        with pytest.raises(ToneModelAccessDeniedError):
            model.delete_by("q")
        assert model.is_deleted is False


# ============================================
# Catalog Query Tests
# ============================================


class TestCatalogQueryService:
    async def test_default_page_lists_newest_listable(self, query_service) -> None:
        result = await query_service.fetch_page(ViewState(), 20)
        assert result.total == 4
        assert [item.id for item in result.items] == ["pedal-1", "amp-3", "amp-2", "amp-1"]
        assert result.filter == "all"
        assert result.page == 1
        assert [c.slug for c in result.categories] == ["amp", "full-rig", "pedal"]

    async def test_filter_by_category(self, query_service, tone_model_repo) -> None:
        result = await query_service.fetch_page(ViewState(filter_slug="amp"), 20)
        assert result.total == 3
        assert result.filter == "amp"
        assert {item.category.slug for item in result.items} == {"amp"}
        assert tone_model_repo.last_query.category_id == 1

    async def test_unknown_filter_lists_everything(self, query_service) -> None:
        result = await query_service.fetch_page(ViewState(filter_slug="synth"), 20)
        assert result.total == 4
        assert result.filter == "all"

    async def test_popular_sort(self, query_service) -> None:
        result = await query_service.fetch_page(ViewState(sort_by=SortBy.POPULAR), 20)
        assert [item.id for item in result.items] == ["amp-2", "pedal-1", "amp-1", "amp-3"]
        assert result.sort_by == SortBy.POPULAR

    async def test_ascending_sort(self, query_service) -> None:
        result = await query_service.fetch_page(
            ViewState(sort_by=SortBy.POPULAR, sort_direction="asc"), 20
        )
        assert result.items[0].id == "amp-3"
        assert result.sort_direction == "asc"

    async def test_unknown_direction_is_desc(self, query_service) -> None:
        result = await query_service.fetch_page(ViewState(sort_direction="sideways"), 20)
        assert result.sort_direction == "desc"

    async def test_tag_filter(self, query_service) -> None:
        result = await query_service.fetch_page(ViewState(tags="vintage"), 20)
        assert {item.id for item in result.items} == {"amp-1", "amp-3"}
        assert result.total == 2

    async def test_username_filter(self, query_service) -> None:
        result = await query_service.fetch_page(ViewState(username="ampwizard"), 20)
        assert {item.id for item in result.items} == {"amp-2", "pedal-1"}
        assert all(item.username == "ampwizard" for item in result.items)

    async def test_page_slicing_keeps_total(self, query_service) -> None:
        result = await query_service.fetch_page(ViewState(page=2), 3)
        assert [item.id for item in result.items] == ["amp-1"]
        assert result.total == 4
        assert result.page_size == 3

    async def test_page_past_the_end_is_empty(self, query_service) -> None:
        result = await query_service.fetch_page(ViewState(page=5), 2)
        assert result.items == ()
        assert result.total == 4
        assert result.page == 5

    async def test_rejects_bad_page_size(self, query_service) -> None:
        with pytest.raises(InvalidPageSizeError):
            await query_service.fetch_page(ViewState(), 0)

    async def test_aggregate_counts(self, query_service) -> None:
        counts = await query_service.aggregate_counts()
        assert [(c.name, c.count) for c in counts] == [
            ("amps", 3),
            ("pedals", 1),
            ("full-rigs", 0),
        ]


async def test_my_models_include_hidden_and_private(tone_model_repo) -> None:
    models = await MyModelsQueryService(tone_model_repo).list_for_profile("profile-1")
    assert [m.id for m in models] == ["private-1", "hidden-1", "amp-3", "amp-1"]
    by_id = {m.id: m for m in models}
    assert by_id["hidden-1"].status == ToneModelStatus.HIDDEN
    assert by_id["private-1"].status == ToneModelStatus.PUBLISHED
    assert by_id["amp-1"].category is not None
    assert by_id["amp-1"].category.title == "Amp"


# ============================================
# Delete Handler Tests
# ============================================


class TestDeleteToneModelHandler:
    async def test_owner_deletes(self, tone_model_repo) -> None:
        handler = DeleteToneModelHandler(tone_model_repo)
        await handler.handle(
            DeleteToneModelCommand(
                model_id="amp-1", profile_id="profile-1", caller_profile_id="profile-1"
            )
        )
        assert tone_model_repo.models["amp-1"].is_deleted is True
        assert await tone_model_repo.get_by_id("amp-1") is None

    async def test_other_profile_denied(self, tone_model_repo) -> None:
        handler = DeleteToneModelHandler(tone_model_repo)
        with pytest.raises(ToneModelAccessDeniedError):
            await handler.handle(
                DeleteToneModelCommand(
                    model_id="amp-1", profile_id="profile-2", caller_profile_id="profile-2"
                )
            )
        assert tone_model_repo.models["amp-1"].is_deleted is False

    async def test_profile_must_match_caller(self, tone_model_repo) -> None:
        handler = DeleteToneModelHandler(tone_model_repo)
        with pytest.raises(ToneModelAccessDeniedError):
            await handler.handle(
                DeleteToneModelCommand(
                    model_id="amp-1", profile_id="profile-1", caller_profile_id="profile-2"
                )
            )

    @pytest.mark.parametrize("model_id", ["missing", "deleted-1"])
    async def test_missing_model(self, tone_model_repo, model_id: str) -> None:
        handler = DeleteToneModelHandler(tone_model_repo)
        with pytest.raises(ToneModelNotFoundError):
            await handler.handle(
                DeleteToneModelCommand(
                    model_id=model_id, profile_id="profile-1", caller_profile_id="profile-1"
                )
            )
