"""List fetch boundary: decides which fetched page is current."""

from loguru import logger
from pydantic import BaseModel, ConfigDict

from src.core.infrastructure.logging import BusinessEvents
from src.modules.listing.application.filter_resolver import resolve
from src.modules.listing.domain.entities import CategorySet, PageResult, ViewState


class FetchTicket(BaseModel):
    """Tag attached to one committed navigation and the fetch it triggers."""

    model_config = ConfigDict(frozen=True)

    sequence: int
    view_state: ViewState


class ListFetchBoundary:
    """Tracks committed navigations and adopts only the latest one's page.

    Sequence numbers grow monotonically per commit. A result is adopted when
    its ticket is the latest one, or, for untagged results, when it echoes the
    latest committed view state. The committed filter is resolved against
    the page's categories first, so an unknown slug matches "all".
    Anything else is stale and ignored.
    """

    def __init__(self) -> None:
        self._sequence = 0
        self._latest: FetchTicket | None = None
        self._current: PageResult | None = None
        self._settled_sequence: int | None = None
        self.logger = logger.bind(service="ListFetchBoundary")

    @property
    def latest(self) -> FetchTicket | None:
        return self._latest

    @property
    def current(self) -> PageResult | None:
        """The one PageResult considered current, if any."""
        return self._current

    @property
    def in_flight(self) -> bool:
        return self._latest is not None and self._settled_sequence != self._latest.sequence

    def commit(self, view_state: ViewState) -> FetchTicket:
        self._sequence += 1
        self._latest = FetchTicket(sequence=self._sequence, view_state=view_state)
        return self._latest

    def is_superseded(self, ticket: FetchTicket) -> bool:
        return self._latest is None or ticket.sequence != self._latest.sequence

    def observe(self, result: PageResult, ticket: FetchTicket | None = None) -> bool:
        """Adopt ``result`` if it answers the latest navigation. Returns adoption."""
        if self._latest is None:
            self.logger.debug("Ignoring page result with no committed navigation")
            return False

        if ticket is not None:
            accepted = ticket.sequence == self._latest.sequence
        else:
            accepted = result.echoes(_resolved(self._latest.view_state, result))

        if not accepted:
            BusinessEvents.stale_page_discarded(
                sequence=ticket.sequence if ticket else None,
                latest_sequence=self._latest.sequence,
            )
            return False

        self._current = result
        self._settled_sequence = self._latest.sequence
        return True


def _resolved(view_state: ViewState, result: PageResult) -> ViewState:
    categories = CategorySet.from_categories(result.categories)
    return view_state.with_changes(filter_slug=resolve(view_state.filter_slug, categories).slug)
