# ABOUTME: Tests for catalog/composer.py branch selection, sorting and pagination.
# ABOUTME: Verifies candidate resolution per filter combination and page totals.

from collections.abc import Callable

from pokecatalog.catalog.composer import (
    Branch,
    compose_results,
    is_search_not_found,
    paginate,
    resolve_candidates,
    select_branch,
    sort_entries,
    total_pages,
)
from pokecatalog.catalog.filter_state import FilterState
from pokecatalog.gateway.schemas import Entry

EntryFactory = Callable[..., Entry]


class TestSelectBranch:
    """Tests for select_branch function."""

    def test_favorites_take_precedence(self) -> None:
        """Favorites-only wins over search and type."""
        filters = FilterState(query="pikachu", type_name="fire", favorites_only=True)

        assert select_branch(filters) is Branch.FAVORITES

    def test_search_and_type(self) -> None:
        """Search combined with a type filter."""
        assert select_branch(FilterState(query="pikachu", type_name="electric")) is Branch.SEARCH_IN_TYPE

    def test_search_only(self) -> None:
        """Search without a type filter."""
        assert select_branch(FilterState(query="pikachu")) is Branch.SEARCH

    def test_type_only(self) -> None:
        """Type filter without a search."""
        assert select_branch(FilterState(type_name="fire")) is Branch.TYPE

    def test_default_list(self) -> None:
        """No filters falls through to the default list."""
        assert select_branch(FilterState()) is Branch.DEFAULT_LIST


class TestResolveCandidates:
    """Tests for resolve_candidates function."""

    def test_favorites_sorted(self) -> None:
        """Favorite ids are returned in ascending order."""
        result = resolve_candidates(FilterState(favorites_only=True), {7, 1, 4})

        assert result.ids == (1, 4, 7)

    def test_search_in_matching_type(self, make_entry: EntryFactory) -> None:
        """A search match carrying the type is the only candidate."""
        pikachu = make_entry(25, name="pikachu", types=("electric",))

        result = resolve_candidates(
            FilterState(query="pikachu", type_name="electric"),
            set(),
            search_result=pikachu,
            type_member_ids=[25, 26, 81],
        )

        assert result.ids == (25,)
        assert result.excluded_by_type is False

    def test_search_excluded_by_type(self, make_entry: EntryFactory) -> None:
        """A search match without the type yields nothing and is flagged."""
        pikachu = make_entry(25, name="pikachu", types=("electric",))

        result = resolve_candidates(
            FilterState(query="pikachu", type_name="fire"),
            set(),
            search_result=pikachu,
            type_member_ids=[4, 5, 6],
        )

        assert result.ids == ()
        assert result.excluded_by_type is True

    def test_search_without_match(self) -> None:
        """A search that matched nothing has no candidates."""
        result = resolve_candidates(FilterState(query="missingno"), set(), search_result=None)

        assert result.ids == ()

    def test_type_members_keep_source_order(self) -> None:
        """Type members are returned in source order."""
        result = resolve_candidates(FilterState(type_name="fire"), set(), type_member_ids=[6, 4, 5])

        assert result.ids == (6, 4, 5)

    def test_default_list_ids(self) -> None:
        """The default list uses the list page ids."""
        result = resolve_candidates(FilterState(), set(), list_ids=[1, 2, 3])

        assert result.branch is Branch.DEFAULT_LIST
        assert result.ids == (1, 2, 3)


class TestSortEntries:
    """Tests for sort_entries function."""

    def test_sort_by_name_case_insensitive(self, make_entry: EntryFactory) -> None:
        """Names sort case-insensitively."""
        entries = [make_entry(1, name="bulbasaur"), make_entry(2, name="Abra"), make_entry(3, name="charmander")]

        result = sort_entries(entries, "name")

        assert [e.id for e in result] == [2, 1, 3]

    def test_sort_by_height_descending_with_id_tiebreak(self, make_entry: EntryFactory) -> None:
        """Tallest first, equal heights by ascending id."""
        entries = [make_entry(9, height=5), make_entry(3, height=20), make_entry(1, height=5)]

        result = sort_entries(entries, "height")

        assert [e.id for e in result] == [3, 1, 9]

    def test_sort_by_weight_descending(self, make_entry: EntryFactory) -> None:
        """Heaviest first."""
        entries = [make_entry(1, weight=69), make_entry(143, weight=4600), make_entry(25, weight=60)]

        result = sort_entries(entries, "weight")

        assert [e.id for e in result] == [143, 1, 25]

    def test_sort_is_idempotent(self, make_entry: EntryFactory) -> None:
        """Sorting a sorted list changes nothing."""
        entries = [make_entry(i, height=i % 3) for i in range(1, 10)]

        once = sort_entries(entries, "height")
        twice = sort_entries(once, "height")

        assert once == twice


class TestPagination:
    """Tests for total_pages and paginate functions."""

    def test_exact_page(self) -> None:
        """Twenty items fill exactly one page."""
        assert total_pages(20, 20) == 1

    def test_one_over(self) -> None:
        """Twenty-one items need two pages."""
        assert total_pages(21, 20) == 2

    def test_empty(self) -> None:
        """Nothing to show means zero pages."""
        assert total_pages(0, 20) == 0

    def test_paginate_second_page(self, make_entry: EntryFactory) -> None:
        """The second page holds the remaining items."""
        entries = [make_entry(i) for i in range(1, 22)]

        result = paginate(entries, 2, 20)

        assert [e.id for e in result] == [21]


class TestComposeResults:
    """Tests for compose_results function."""

    def test_type_branch_paginates_client_side(self, make_entry: EntryFactory) -> None:
        """Type results are sliced by the filter page."""
        entries = [make_entry(i) for i in range(1, 26)]
        filters = FilterState(type_name="normal", page=2)

        result = compose_results(entries, filters, set(), page_size=20)

        assert [e.id for e in result.entries] == [21, 22, 23, 24, 25]
        assert result.total_items == 25
        assert result.total_pages == 2

    def test_default_list_is_one_remote_page(self, make_entry: EntryFactory) -> None:
        """The default list batch is shown whole, whatever the filter page."""
        entries = [make_entry(i) for i in range(41, 61)]

        result = compose_results(entries, FilterState(page=3), set(), page_size=20)

        assert len(result.entries) == 20
        assert result.entries[0].id == 41

    def test_favorites_refiltered(self, make_entry: EntryFactory) -> None:
        """Entries that are no longer favorites are dropped."""
        entries = [make_entry(1), make_entry(4), make_entry(7)]

        result = compose_results(entries, FilterState(favorites_only=True), {1, 7}, page_size=20)

        assert [e.id for e in result.entries] == [1, 7]
        assert result.total_items == 2

    def test_sorted_before_pagination(self, make_entry: EntryFactory) -> None:
        """Sorting applies to the whole result, not just the page."""
        entries = [make_entry(i, weight=i) for i in range(1, 31)]
        filters = FilterState(type_name="normal", sort="weight")

        result = compose_results(entries, filters, set(), page_size=20)

        assert result.entries[0].id == 30


class TestIsSearchNotFound:
    """Tests for is_search_not_found function."""

    def test_no_query(self) -> None:
        """Without a query there is nothing to report."""
        assert is_search_not_found(FilterState(), True, None) is False

    def test_search_not_completed(self) -> None:
        """A pending search is not reported as missing."""
        assert is_search_not_found(FilterState(query="mew"), False, None) is False

    def test_no_match(self) -> None:
        """A completed search without a match is reported."""
        assert is_search_not_found(FilterState(query="missingno"), True, None) is True

    def test_match_excluded_by_type(self, make_entry: EntryFactory) -> None:
        """A match outside the selected type is reported."""
        filters = FilterState(query="pikachu", type_name="fire")
        pikachu = make_entry(25, name="pikachu", types=("electric",))

        assert is_search_not_found(filters, True, pikachu, {4, 5, 6}) is True

    def test_match_inside_type(self, make_entry: EntryFactory) -> None:
        """A match carrying the selected type is not reported."""
        filters = FilterState(query="pikachu", type_name="electric")
        pikachu = make_entry(25, name="pikachu", types=("electric",))

        assert is_search_not_found(filters, True, pikachu, {25}) is False
