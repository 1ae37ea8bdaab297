"""Filter resolution and listing headings."""

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict

from src.modules.listing.application.query_codec import build_url, encode
from src.modules.listing.domain.entities import (
    ALL_CATEGORY,
    ALL_FILTER_SLUG,
    CategoryCount,
    CategoryOption,
    CategorySet,
    ViewState,
)

# Categories called out in the default heading: (count name, filter slug, label)
HEADLINE_CATEGORIES: tuple[tuple[str, str, str], ...] = (
    ("amps", "amp", "amps"),
    ("pedals", "pedal", "pedals"),
)


class TitleKind(str, Enum):
    TAG = "tag"
    CATEGORY = "category"
    COUNTS = "counts"


class TitleLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    href: str


class ListingTitle(BaseModel):
    """Heading shown above the list."""

    model_config = ConfigDict(frozen=True)

    kind: TitleKind
    text: str
    links: tuple[TitleLink, ...] = ()


class SelectOption(BaseModel):
    """Filter dropdown entry; ``value`` is the category id as a string."""

    model_config = ConfigDict(frozen=True)

    value: str
    description: str


def resolve(slug: str | None, categories: CategorySet) -> CategoryOption:
    """Resolve ``slug`` to a category, falling back to "All"."""
    return categories.by_slug(slug) or ALL_CATEGORY


def format_number(value: int) -> str:
    return f"{value:,}"


def counts_title(counts: Sequence[CategoryCount], base_path: str = "/") -> ListingTitle:
    """Aggregate heading: "Explore over N models, including A amps, and P pedals."."""
    total = sum(count.count for count in counts)
    by_name = {count.name: count.count for count in counts}

    links = tuple(
        TitleLink(
            label=format_number(by_name.get(name, 0)),
            href=build_url(base_path, encode({"filter_slug": slug})),
        )
        for name, slug, _ in HEADLINE_CATEGORIES
    )
    parts = [f"{link.label} {label}" for link, (_, _, label) in zip(links, HEADLINE_CATEGORIES)]
    text = f"Explore over {format_number(total)} models, including {', and '.join(parts)}."
    return ListingTitle(kind=TitleKind.COUNTS, text=text, links=links)


def title_for(
    view_state: ViewState,
    categories: CategorySet,
    counts: Sequence[CategoryCount] = (),
    base_path: str = "/",
) -> ListingTitle:
    """Pick the heading for ``view_state``.

    Precedence: tag search, then a resolvable non-"all" category, then the
    aggregate counts heading.
    """
    if view_state.tags:
        return ListingTitle(kind=TitleKind.TAG, text=f"#{view_state.tags}")

    if view_state.filter_slug and view_state.filter_slug != ALL_FILTER_SLUG:
        category = categories.by_slug(view_state.filter_slug)
        if category is not None:
            return ListingTitle(kind=TitleKind.CATEGORY, text=f"{category.title}s")

    return counts_title(counts, base_path)


def filter_options(categories: CategorySet) -> tuple[SelectOption, ...]:
    return tuple(
        SelectOption(value=str(option.id), description=option.title)
        for option in categories
    )


def selected_filter_value(slug: str | None, categories: CategorySet) -> str:
    return str(resolve(slug, categories).id)
