"""Pagination controller.

The server-reported page is the current page; the controller never clamps a
requested page to the page count. Asking for a page past the end is the data
layer's call (it answers with an empty page).
"""

from pydantic import BaseModel, ConfigDict

from src.modules.listing.domain.entities import PageResult, ViewState
from src.modules.listing.domain.exceptions import (
    InvalidPageIndexError,
    InvalidPageSizeError,
)


def page_count(total: int, page_size: int) -> int:
    """ceil(total / page_size), never below zero."""
    if page_size <= 0:
        raise InvalidPageSizeError(page_size)
    return max(0, -(-total // page_size))


def page_window(
    current_index: int,
    count: int,
    range_displayed: int = 3,
    margin_pages: int = 1,
) -> tuple[int | None, ...]:
    """Page numbers to display, ``None`` marking a collapsed gap.

    Shows ``margin_pages`` at each end and ``range_displayed`` pages around
    the current one. A gap of exactly one page shows that page instead of a
    break.
    """
    if count <= range_displayed + 2 * margin_pages:
        return tuple(range(1, count + 1))

    current = current_index + 1
    start = max(1, current - range_displayed // 2)
    end = start + range_displayed - 1
    if end > count:
        end = count
        start = count - range_displayed + 1

    shown = (
        set(range(1, margin_pages + 1))
        | set(range(count - margin_pages + 1, count + 1))
        | set(range(start, end + 1))
    )

    window: list[int | None] = []
    previous = 0
    for page in sorted(shown):
        gap = page - previous
        if gap == 2:
            window.append(page - 1)
        elif gap > 2:
            window.append(None)
        window.append(page)
        previous = page
    return tuple(window)


class PaginationModel(BaseModel):
    """Pagination controls for one settled page."""

    model_config = ConfigDict(frozen=True)

    page_count: int
    current_index: int
    pages: tuple[int, ...]
    window: tuple[int | None, ...]
    has_previous: bool
    has_next: bool


class PaginationController:
    """Page count, control visibility and page navigation."""

    def __init__(self, page_size: int, range_displayed: int = 3, margin_pages: int = 1):
        if page_size <= 0:
            raise InvalidPageSizeError(page_size)
        self.page_size = page_size
        self.range_displayed = range_displayed
        self.margin_pages = margin_pages

    def page_count(self, total: int) -> int:
        return page_count(total, self.page_size)

    def should_render(self, total: int) -> bool:
        """Controls exist only with two or more pages."""
        return self.page_count(total) > 1

    def build(self, result: PageResult) -> PaginationModel | None:
        count = self.page_count(result.total)
        if count <= 1:
            return None
        current_index = result.page - 1
        return PaginationModel(
            page_count=count,
            current_index=current_index,
            pages=tuple(range(1, count + 1)),
            window=page_window(
                current_index, count, self.range_displayed, self.margin_pages
            ),
            has_previous=current_index > 0,
            has_next=current_index < count - 1,
        )

    def on_page_click(self, view_state: ViewState, selected_index: int) -> ViewState:
        """Zero-based page click to the view state for page ``selected_index + 1``."""
        if selected_index < 0:
            raise InvalidPageIndexError(selected_index)
        return view_state.with_changes(page=selected_index + 1)

    def jump(self, view_state: ViewState, page: int) -> ViewState:
        return self.on_page_click(view_state, page - 1)

    def next_page(self, view_state: ViewState, result: PageResult) -> ViewState | None:
        """View state for the page after the server's current one, if any."""
        if result.page >= self.page_count(result.total):
            return None
        return self.on_page_click(view_state, result.page)

    def previous_page(self, view_state: ViewState, result: PageResult) -> ViewState | None:
        if result.page <= 1:
            return None
        return self.on_page_click(view_state, result.page - 2)
