"""Tests for the pagination controller."""

from collections.abc import Callable

import pytest

from src.modules.listing.application.pagination import (
    PaginationController,
    page_count,
    page_window,
)
from src.modules.listing.domain.entities import PageResult, ViewState
from src.modules.listing.domain.exceptions import (
    InvalidPageIndexError,
    InvalidPageSizeError,
)


@pytest.mark.parametrize(
    ("total", "page_size", "expected"),
    [(45, 20, 3), (40, 20, 2), (41, 20, 3), (1, 20, 1), (0, 20, 0), (7, 1, 7)],
)
def test_page_count(total: int, page_size: int, expected: int) -> None:
    assert page_count(total, page_size) == expected


@pytest.mark.parametrize("page_size", [0, -5])
def test_page_count_rejects_non_positive_size(page_size: int) -> None:
    with pytest.raises(InvalidPageSizeError):
        page_count(10, page_size)


def test_controller_rejects_non_positive_size() -> None:
    with pytest.raises(InvalidPageSizeError):
        PaginationController(0)


@pytest.mark.parametrize(
    ("current_index", "count", "expected"),
    [
        (0, 3, (1, 2, 3)),
        (0, 10, (1, 2, 3, None, 10)),
        (2, 10, (1, 2, 3, 4, None, 10)),
        (3, 10, (1, 2, 3, 4, 5, None, 10)),
        (5, 10, (1, None, 5, 6, 7, None, 10)),
        (9, 10, (1, None, 8, 9, 10)),
    ],
)
def test_page_window(current_index: int, count: int, expected: tuple) -> None:
    assert page_window(current_index, count) == expected


class TestPaginationController:
    def test_should_render_only_with_two_or_more_pages(self) -> None:
        controller = PaginationController(20)
        assert controller.should_render(0) is False
        assert controller.should_render(20) is False
        assert controller.should_render(21) is True

    def test_build(self, make_page: Callable[..., PageResult]) -> None:
        model = PaginationController(20).build(make_page(total=45, page=2))
        assert model is not None
        assert model.page_count == 3
        assert model.current_index == 1
        assert model.pages == (1, 2, 3)
        assert model.has_previous is True
        assert model.has_next is True

    def test_build_single_page_is_none(self, make_page: Callable[..., PageResult]) -> None:
        assert PaginationController(20).build(make_page(total=20)) is None
        assert PaginationController(20).build(make_page(total=0)) is None

    def test_server_page_is_current_even_past_the_end(
        self, make_page: Callable[..., PageResult]
    ) -> None:
        model = PaginationController(20).build(make_page(total=45, page=9))
        assert model is not None
        assert model.current_index == 8
        assert model.has_next is False

    def test_page_click(self) -> None:
        state = ViewState(filter_slug="amp", tags="lead")
        clicked = PaginationController(20).on_page_click(state, 1)
        assert clicked.page == 2
        assert clicked.filter_slug == "amp"
        assert clicked.tags == "lead"

    def test_page_click_negative_index(self) -> None:
        with pytest.raises(InvalidPageIndexError):
            PaginationController(20).on_page_click(ViewState(), -1)

    def test_jump(self) -> None:
        assert PaginationController(20).jump(ViewState(), 3).page == 3

    def test_next_and_previous(self, make_page: Callable[..., PageResult]) -> None:
        controller = PaginationController(20)
        state = ViewState(page=2)
        result = make_page(total=45, page=2)

        next_state = controller.next_page(state, result)
        previous_state = controller.previous_page(state, result)
        assert next_state is not None and next_state.page == 3
        assert previous_state is not None and previous_state.page == 1

    def test_no_next_on_last_page(self, make_page: Callable[..., PageResult]) -> None:
        controller = PaginationController(20)
        assert controller.next_page(ViewState(page=3), make_page(total=45, page=3)) is None
        assert controller.previous_page(ViewState(), make_page(total=45, page=1)) is None
