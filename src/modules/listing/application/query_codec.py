"""Query string codec for the listing view state.

URL keys are fixed: ``page``, ``filter``, ``tags``, ``sortBy``,
``sortDirection``, ``username``. A missing key means the field's default.

Encoding merges into an existing query string: only the keys being written
change, everything else (including keys this codec does not know) is kept in
place. Writing ``None`` removes the key.
"""

from collections.abc import Mapping
from typing import Any

from starlette.datastructures import QueryParams

from src.modules.listing.domain.entities import (
    ALL_FILTER_SLUG,
    DEFAULT_SORT_DIRECTION,
    CategorySet,
    SortBy,
    ViewState,
)
from src.modules.listing.domain.exceptions import UnknownViewStateFieldError

# ViewState field -> URL key, in the order new keys are appended.
QUERY_KEYS: dict[str, str] = {
    "page": "page",
    "filter_slug": "filter",
    "sort_by": "sortBy",
    "sort_direction": "sortDirection",
    "username": "username",
    "tags": "tags",
}


def _format_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, SortBy):
        return value.value
    return str(value)


def encode(partial: ViewState | Mapping[str, Any], existing_query: str = "") -> str:
    """Write the fields of ``partial`` into ``existing_query``.

    A ViewState writes every field; a mapping writes only its own keys.
    """
    fields = partial.model_dump() if isinstance(partial, ViewState) else dict(partial)
    updates: dict[str, str | None] = {}
    for field, value in fields.items():
        key = QUERY_KEYS.get(field)
        if key is None:
            raise UnknownViewStateFieldError(field)
        updates[key] = _format_value(value)

    merged: list[tuple[str, str]] = []
    written: set[str] = set()
    for key, value in QueryParams(existing_query.lstrip("?")).multi_items():
        if key not in updates:
            merged.append((key, value))
            continue
        if key not in written and updates[key] is not None:
            merged.append((key, updates[key]))
        written.add(key)

    for key in QUERY_KEYS.values():
        if key in updates and key not in written and updates[key] is not None:
            merged.append((key, updates[key]))

    return str(QueryParams(merged))


def _parse_page(raw: str | None) -> int:
    if raw is None:
        return 1
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return 1
    return max(1, int(raw))


def _parse_sort_by(raw: str | None) -> SortBy:
    try:
        return SortBy(raw)
    except ValueError:
        return SortBy.NEWEST


def decode(query: str, categories: CategorySet | None = None) -> ViewState:
    """Read a ViewState from ``query``, degrading bad values to defaults.

    When ``categories`` is given, a filter slug outside it becomes ``"all"``.
    Without it (nothing fetched yet) the slug is kept and resolved later.
    """
    params = QueryParams(query.lstrip("?"))

    filter_slug = params.get("filter") or ALL_FILTER_SLUG
    if categories is not None and filter_slug not in categories:
        filter_slug = ALL_FILTER_SLUG

    return ViewState(
        page=_parse_page(params.get("page")),
        filter_slug=filter_slug,
        sort_by=_parse_sort_by(params.get("sortBy")),
        sort_direction=params.get("sortDirection") or DEFAULT_SORT_DIRECTION,
        tags=params.get("tags") or None,
        username=params.get("username") or None,
    )


def build_url(base_path: str, query: str) -> str:
    """Join a path and an encoded query string."""
    return f"{base_path}?{query}" if query else base_path
