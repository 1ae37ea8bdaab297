"""Tests for the listing query string codec."""

import pytest

from src.modules.listing.application.query_codec import build_url, decode, encode
from src.modules.listing.domain.entities import CategorySet, SortBy, ViewState
from src.modules.listing.domain.exceptions import UnknownViewStateFieldError


class TestEncode:
    def test_partial_write_keeps_other_keys(self) -> None:
        assert encode({"page": 2}, "filter=amp&sortBy=popular") == (
            "filter=amp&sortBy=popular&page=2"
        )

    def test_existing_key_replaced_in_place(self) -> None:
        assert encode({"page": 3}, "page=1&filter=amp") == "page=3&filter=amp"

    def test_unknown_keys_preserved(self) -> None:
        assert encode({"page": 2}, "utm_source=mail") == "utm_source=mail&page=2"

    def test_none_removes_key(self) -> None:
        assert encode({"tags": None}, "tags=fuzz&page=2") == "page=2"

    def test_leading_question_mark_ignored(self) -> None:
        assert encode({"page": 2}, "?filter=amp") == "filter=amp&page=2"

    def test_full_view_state_skips_absent_optionals(self) -> None:
        assert encode(ViewState()) == "page=1&filter=all&sortBy=newest&sortDirection=desc"

    def test_sort_by_written_as_value(self) -> None:
        assert encode({"sort_by": SortBy.POPULAR}) == "sortBy=popular"

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(UnknownViewStateFieldError):
            encode({"colour": "red"})

    def test_values_are_url_encoded(self) -> None:
        assert encode({"tags": "vintage fuzz"}) == "tags=vintage+fuzz"


class TestDecode:
    def test_empty_query_gives_defaults(self) -> None:
        assert decode("") == ViewState()

    @pytest.mark.parametrize("raw", ["abc", "0", "-2", "1.5", "²"])
    def test_malformed_page_becomes_one(self, raw: str) -> None:
        assert decode(f"page={raw}").page == 1

    def test_page_is_read(self) -> None:
        assert decode("?page=7").page == 7

    def test_unknown_sort_falls_back_to_newest(self) -> None:
        assert decode("sortBy=oldest").sort_by == SortBy.NEWEST

    def test_sort_direction_passed_through(self) -> None:
        assert decode("sortDirection=sideways").sort_direction == "sideways"

    def test_unknown_filter_degrades_with_categories(self, category_set: CategorySet) -> None:
        assert decode("filter=synth", category_set).filter_slug == "all"

    def test_unknown_filter_kept_without_categories(self) -> None:
        assert decode("filter=synth").filter_slug == "synth"

    def test_known_filter(self, category_set: CategorySet) -> None:
        assert decode("filter=pedal", category_set).filter_slug == "pedal"

    def test_empty_tags_and_username_are_absent(self) -> None:
        state = decode("tags=&username=")
        assert state.tags is None
        assert state.username is None


def test_round_trip(category_set: CategorySet) -> None:
    state = ViewState(
        page=3,
        filter_slug="amp",
        sort_by=SortBy.POPULAR,
        sort_direction="asc",
        tags="vintage-fuzz",
        username="tonesmith",
    )
    assert decode(encode(state), category_set) == state


def test_build_url() -> None:
    assert build_url("/", "page=2") == "/?page=2"
    assert build_url("/models", "") == "/models"
