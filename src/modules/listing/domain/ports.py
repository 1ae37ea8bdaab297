"""Ports the listing engine consumes from the data layer."""

from typing import Protocol

from src.modules.listing.domain.entities import CategoryCount, PageResult, ViewState


class PageFetcher(Protocol):
    """Fetches one page for a view state.

    ``total`` must be computed under the same filter as ``items`` and
    ``categories`` must cover the whole catalog.
    """

    async def fetch_page(self, view_state: ViewState, page_size: int) -> PageResult: ...


class CountsProvider(Protocol):
    """Aggregate counts used by the default listing heading."""

    async def aggregate_counts(self) -> list[CategoryCount]: ...
