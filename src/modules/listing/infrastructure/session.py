"""Async driver that runs a reconciler against a data layer."""

import asyncio

from loguru import logger

from src.modules.listing.application.models import ListingView, NavigationRequest
from src.modules.listing.application.reconciler import ViewStateReconciler
from src.modules.listing.domain.entities import PageResult, SortBy
from src.modules.listing.domain.ports import CountsProvider, PageFetcher


class ListingSession:
    """Turns navigation intents into fetch tasks.

    Every navigation gets its own task. When ``abort_superseded`` is on, a new
    navigation cancels the tasks of older ones; otherwise they run to the end
    and the reconciler discards their pages. Fetch errors are re-raised to the
    caller awaiting that navigation.

    ``navigate`` can be handed to the reconciler as its navigator callback
    when the host is already inside a running event loop. A navigation that
    already has a task keeps it, so ``follow`` then waits on that same fetch.
    """

    def __init__(
        self,
        reconciler: ViewStateReconciler,
        fetcher: PageFetcher,
        counts_provider: CountsProvider | None = None,
    ) -> None:
        self.reconciler = reconciler
        self._fetcher = fetcher
        self._counts_provider = counts_provider
        self._tasks: dict[int, asyncio.Task[PageResult | None]] = {}
        self.logger = logger.bind(service="ListingSession")

    @property
    def view(self) -> ListingView:
        return self.reconciler.render()

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks.values() if not task.done())

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def open(self, query: str = "") -> PageResult | None:
        """Initial load (or back/forward) for ``query``."""
        if self._counts_provider is not None:
            await self.refresh_counts()
        return await self.follow(self.reconciler.on_url_change(query))

    async def change_filter(self, selected: str | int) -> PageResult | None:
        return await self.follow(self.reconciler.on_filter_change(selected))

    async def change_sort(self, sort_by: SortBy | str) -> PageResult | None:
        return await self.follow(self.reconciler.on_sort_change(sort_by))

    async def click_page(self, selected_index: int) -> PageResult | None:
        return await self.follow(self.reconciler.on_page_click(selected_index))

    async def next_page(self) -> PageResult | None:
        request = self.reconciler.next_page()
        if request is None:
            return None
        return await self.follow(request)

    async def previous_page(self) -> PageResult | None:
        request = self.reconciler.previous_page()
        if request is None:
            return None
        return await self.follow(request)

    async def refresh_counts(self) -> None:
        if self._counts_provider is None:
            return
        self.reconciler.set_counts(await self._counts_provider.aggregate_counts())

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def navigate(self, request: NavigationRequest) -> asyncio.Task[PageResult | None]:
        """Start the fetch for ``request`` (once per navigation) and return its task."""
        sequence = request.ticket.sequence
        existing = self._tasks.get(sequence)
        if existing is not None:
            return existing

        if self.reconciler.config.abort_superseded:
            self._abort_older_than(sequence)

        task = asyncio.create_task(self._fetch(request), name=f"listing-fetch-{sequence}")
        self._tasks[sequence] = task
        task.add_done_callback(lambda done: self._forget(sequence, done))
        return task

    async def follow(self, request: NavigationRequest) -> PageResult | None:
        """Fetch for ``request`` and wait.

        Returns the page if it became current, ``None`` if a newer navigation
        replaced it first.
        """
        task = self.navigate(request)
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task.cancelled():
            return None
        return task.result()

    async def aclose(self) -> None:
        """Cancel and drain every fetch still running."""
        tasks = [task for task in self._tasks.values() if not task.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _forget(self, sequence: int, task: asyncio.Task[PageResult | None]) -> None:
        if self._tasks.get(sequence) is task:
            del self._tasks[sequence]

    def _abort_older_than(self, sequence: int) -> None:
        for older, task in list(self._tasks.items()):
            if older < sequence and not task.done():
                self.logger.debug(f"Cancelling superseded fetch #{older}")
                task.cancel()

    async def _fetch(self, request: NavigationRequest) -> PageResult | None:
        result = await self._fetcher.fetch_page(
            request.view_state, self.reconciler.config.page_size
        )
        if self.reconciler.on_page_result(result, request.ticket):
            return result
        return None
