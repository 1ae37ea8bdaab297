"""View state reconciler.

Keeps the committed view state (mirrored from the URL) and the server page
data consistent:

    IDLE --(url/filter/sort/page change)--> NAVIGATION_PENDING
    NAVIGATION_PENDING --(page for the latest navigation)--> SETTLED
    SETTLED --(next change)--> NAVIGATION_PENDING

While a navigation is pending the render model carries no list rows, so the
previous filter's items never show under the new heading. A newer
navigation supersedes an older one; the older page is dropped on arrival.
Fetch failures are not handled here: the reconciler simply stays pending and
the host reports the error.
"""

from collections.abc import Callable, Sequence

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.listing.application.config import ListingConfig
from src.modules.listing.application.fetch_boundary import FetchTicket, ListFetchBoundary
from src.modules.listing.application.filter_resolver import (
    filter_options,
    resolve,
    selected_filter_value,
    title_for,
)
from src.modules.listing.application.models import (
    EMPTY_RESULT_TEXT,
    ListingPhase,
    ListingRow,
    ListingView,
    NavigationRequest,
    SortLink,
)
from src.modules.listing.application.pagination import PaginationController
from src.modules.listing.application.query_codec import build_url, decode, encode
from src.modules.listing.domain.entities import (
    CategoryCount,
    CategorySet,
    PageResult,
    SortBy,
    ViewState,
)

Navigator = Callable[[NavigationRequest], None]

SORT_LABELS: dict[SortBy, str] = {
    SortBy.NEWEST: "NEWEST",
    SortBy.POPULAR: "POPULAR",
}


class ViewStateReconciler:
    """Owns the view state mirror and the loading flag for one listing."""

    def __init__(
        self,
        config: ListingConfig,
        *,
        counts: Sequence[CategoryCount] = (),
        navigator: Navigator | None = None,
        profile_id: str | None = None,
    ) -> None:
        self.config = config
        self._navigator = navigator
        self._profile_id = profile_id
        self._counts = tuple(counts)

        self._boundary = ListFetchBoundary()
        self._pagination = PaginationController(
            config.page_size, config.range_displayed, config.margin_pages
        )

        self._view_state = ViewState()
        self._query = ""
        self._categories = CategorySet.default()
        self._categories_known = False
        self._phase = ListingPhase.IDLE
        self._loading = False
        self.logger = logger.bind(service="ViewStateReconciler")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def phase(self) -> ListingPhase:
        return self._phase

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def view_state(self) -> ViewState:
        return self._view_state

    @property
    def query(self) -> str:
        return self._query

    @property
    def categories(self) -> CategorySet:
        return self._categories

    @property
    def result(self) -> PageResult | None:
        return self._boundary.current

    @property
    def latest_ticket(self) -> FetchTicket | None:
        return self._boundary.latest

    def is_superseded(self, ticket: FetchTicket) -> bool:
        return self._boundary.is_superseded(ticket)

    def set_counts(self, counts: Sequence[CategoryCount]) -> None:
        self._counts = tuple(counts)

    # ------------------------------------------------------------------
    # Navigation intents
    # ------------------------------------------------------------------

    def on_url_change(self, query: str) -> NavigationRequest:
        """The host changed the URL itself (first load, back/forward)."""
        query = query.lstrip("?")
        view_state = decode(query, self._categories if self._categories_known else None)
        return self._commit(view_state, query, notify=False)

    def on_filter_change(self, selected: str | int) -> NavigationRequest:
        """Switch category by slug or by option id; always back to page 1.

        An id or slug that matches nothing selects "All".
        """
        option = None
        text = str(selected)
        if isinstance(selected, int) or (text.isascii() and text.isdigit()):
            option = self._categories.by_id(int(selected))
        if option is None:
            option = resolve(text, self._categories)
            if option.slug != selected:
                self.logger.debug(f"Unknown filter '{selected}', selecting '{option.slug}'")
        view_state = self._view_state.with_changes(filter_slug=option.slug, page=1)
        return self._commit(view_state, encode(view_state, self._query))

    def on_sort_change(self, sort_by: SortBy | str) -> NavigationRequest:
        """Switch sort order; always back to page 1."""
        try:
            sort = SortBy(sort_by)
        except ValueError:
            sort = SortBy.NEWEST
        view_state = self._view_state.with_changes(sort_by=sort, page=1)
        return self._commit(view_state, encode(view_state, self._query))

    def on_page_click(self, selected_index: int) -> NavigationRequest:
        """Zero-based page click from the pagination controls."""
        view_state = self._pagination.on_page_click(self._view_state, selected_index)
        return self._commit(view_state, encode({"page": view_state.page}, self._query))

    def next_page(self) -> NavigationRequest | None:
        result = self._boundary.current
        if result is None:
            return None
        view_state = self._pagination.next_page(self._view_state, result)
        if view_state is None:
            return None
        return self.on_page_click(view_state.page_index)

    def previous_page(self) -> NavigationRequest | None:
        result = self._boundary.current
        if result is None:
            return None
        view_state = self._pagination.previous_page(self._view_state, result)
        if view_state is None:
            return None
        return self.on_page_click(view_state.page_index)

    def _commit(self, view_state: ViewState, query: str, notify: bool = True) -> NavigationRequest:
        ticket = self._boundary.commit(view_state)
        self._view_state = view_state
        self._query = query
        self._loading = True
        self._phase = ListingPhase.NAVIGATION_PENDING

        request = NavigationRequest(
            ticket=ticket,
            view_state=view_state,
            query=query,
            url=build_url(self.config.base_path, query),
        )
        BusinessEvents.navigation_committed(sequence=ticket.sequence, query=query)

        if notify and self._navigator is not None:
            self._navigator(request)
        return request

    # ------------------------------------------------------------------
    # Data layer callbacks
    # ------------------------------------------------------------------

    def on_page_result(self, result: PageResult, ticket: FetchTicket | None = None) -> bool:
        """Offer a fetched page. Returns True if it became the current page."""
        if not self._boundary.observe(result, ticket):
            return False

        self._categories = CategorySet.from_categories(result.categories)
        self._categories_known = True
        resolved = resolve(self._view_state.filter_slug, self._categories).slug
        if resolved != self._view_state.filter_slug:
            self._view_state = self._view_state.with_changes(filter_slug=resolved)
            self._query = encode({"filter_slug": resolved}, self._query)
        self._loading = False
        self._phase = ListingPhase.SETTLED

        settled = self._boundary.latest
        BusinessEvents.page_settled(
            sequence=settled.sequence if settled else 0,
            page=result.page,
            total=result.total,
        )
        return True

    def hydrate(self, query: str, result: PageResult) -> bool:
        """Adopt a page the server rendered together with ``query``."""
        request = self.on_url_change(query)
        return self.on_page_result(result, request.ticket)

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def render(self) -> ListingView:
        view_state = self._view_state
        title = title_for(view_state, self._categories, self._counts, self.config.base_path)
        options = filter_options(self._categories) if self.config.show_filters else ()
        selected = selected_filter_value(view_state.filter_slug, self._categories)

        result = self._boundary.current
        if self._loading or result is None:
            return ListingView(
                phase=self._phase,
                loading=self._loading,
                title=title,
                filter_options=options,
                selected_filter=selected,
                sort_links=self._sort_links(view_state.sort_by),
            )

        rows = tuple(
            ListingRow(
                item=item,
                is_owner=self._profile_id is not None and item.profile_id == self._profile_id,
            )
            for item in result.items
        )
        return ListingView(
            phase=self._phase,
            loading=False,
            title=title,
            rows=rows,
            empty_text=EMPTY_RESULT_TEXT if not rows else None,
            total=result.total,
            pagination=self._pagination.build(result),
            filter_options=options,
            selected_filter=selected,
            sort_links=self._sort_links(result.sort_by),
        )

    def _sort_links(self, active: SortBy) -> tuple[SortLink, ...]:
        if not self.config.show_menu:
            return ()
        links = []
        for sort_by, label in SORT_LABELS.items():
            query = encode({"sort_by": sort_by, "page": 1}, self._query)
            links.append(
                SortLink(
                    sort_by=sort_by,
                    label=label,
                    href=build_url(self.config.base_path, query),
                    active=sort_by == active,
                )
            )
        return tuple(links)
