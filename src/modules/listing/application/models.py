"""Listing application models: navigation intents and the render model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from src.modules.listing.application.fetch_boundary import FetchTicket
from src.modules.listing.application.filter_resolver import ListingTitle, SelectOption
from src.modules.listing.application.pagination import PaginationModel
from src.modules.listing.domain.entities import ListingItem, SortBy, ViewState

EMPTY_RESULT_TEXT = "No results"


class ListingPhase(str, Enum):
    IDLE = "idle"
    NAVIGATION_PENDING = "navigation_pending"
    SETTLED = "settled"


class NavigationRequest(BaseModel):
    """Intent to reload listing data for a new view state.

    The host performs the navigation; the listing engine never does I/O.
    """

    model_config = ConfigDict(frozen=True)

    ticket: FetchTicket
    view_state: ViewState
    query: str
    url: str
    full_reload: bool = True


class ListingRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: ListingItem
    is_owner: bool = False


class SortLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    sort_by: SortBy
    label: str
    href: str
    active: bool


class ListingView(BaseModel):
    """Everything needed to draw the listing for the current phase."""

    model_config = ConfigDict(frozen=True)

    phase: ListingPhase
    loading: bool
    title: ListingTitle
    rows: tuple[ListingRow, ...] = ()
    empty_text: str | None = None
    total: int = 0
    pagination: PaginationModel | None = None
    filter_options: tuple[SelectOption, ...] = ()
    selected_filter: str = "0"
    sort_links: tuple[SortLink, ...] = ()

    @property
    def show_list(self) -> bool:
        return self.phase == ListingPhase.SETTLED and not self.loading
