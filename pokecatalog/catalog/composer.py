"""ABOUTME: Derives the ordered, paginated list of entries for a filter state.
ABOUTME: Pure functions: candidate selection, sorting, favorites re-filtering and pagination."""

import enum
import math
from collections.abc import Callable, Collection, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from pokecatalog.catalog.filter_state import FilterState
from pokecatalog.gateway.schemas import Entry


class Branch(enum.Enum):
    """Which source selects the candidate ids, in precedence order."""

    FAVORITES = "favorites"
    SEARCH_IN_TYPE = "search_in_type"
    SEARCH = "search"
    TYPE = "type"
    DEFAULT_LIST = "default_list"


@dataclass(frozen=True)
class Candidates:
    """Ids selected by a filter branch, before their details are fetched.

    Attributes:
        branch: The branch that produced the ids.
        ids: Candidate ids in selection order.
        excluded_by_type: A search match exists but lacks the selected type.
    """

    branch: Branch
    ids: tuple[int, ...]
    excluded_by_type: bool = False


@dataclass(frozen=True)
class ComposedResult:
    """The entries to display and the totals behind them."""

    entries: tuple[Entry, ...]
    total_items: int
    total_pages: int


def select_branch(filters: FilterState) -> Branch:
    """Pick the branch that determines the candidate ids."""
    if filters.favorites_only:
        return Branch.FAVORITES
    if filters.query and filters.type_name:
        return Branch.SEARCH_IN_TYPE
    if filters.query:
        return Branch.SEARCH
    if filters.type_name:
        return Branch.TYPE
    return Branch.DEFAULT_LIST


def resolve_candidates(
    filters: FilterState,
    favorites: Collection[int],
    search_result: Entry | None = None,
    type_member_ids: Sequence[int] | None = None,
    list_ids: Sequence[int] | None = None,
) -> Candidates:
    """Resolve the candidate id set for ``filters``.

    Args:
        filters: Current filter state.
        favorites: Current favorite ids.
        search_result: Entry matched by the search, None if nothing matched or no search ran.
        type_member_ids: Ids carrying the selected type, None if not fetched.
        list_ids: Ids of the default list page, None if not fetched.

    Returns:
        The branch and its candidate ids. Favorites are returned in ascending order, the
        other branches keep the order of their source.
    """
    branch = select_branch(filters)

    if branch is Branch.FAVORITES:
        return Candidates(branch, tuple(sorted(favorites)))

    if branch is Branch.SEARCH_IN_TYPE:
        if search_result is None or type_member_ids is None:
            return Candidates(branch, ())
        if search_result.id in set(type_member_ids):
            return Candidates(branch, (search_result.id,))
        return Candidates(branch, (), excluded_by_type=True)

    if branch is Branch.SEARCH:
        return Candidates(branch, (search_result.id,) if search_result is not None else ())

    if branch is Branch.TYPE:
        return Candidates(branch, tuple(type_member_ids or ()))

    return Candidates(branch, tuple(list_ids or ()))


_SORT_KEYS: dict[str, Callable[[Entry], Any]] = {
    "id": lambda entry: entry.id,
    "name": lambda entry: (entry.name.casefold(), entry.id),
    "height": lambda entry: (-entry.height, entry.id),
    "weight": lambda entry: (-entry.weight, entry.id),
}


def sort_entries(entries: Iterable[Entry], sort: str) -> list[Entry]:
    """Sort entries by a sort key, breaking ties by ascending id.

    Args:
        entries: Entries to sort.
        sort: ``id`` (ascending), ``name`` (case-insensitive ascending), ``height`` or
            ``weight`` (both descending).

    Returns:
        A new sorted list.

    Raises:
        KeyError: If ``sort`` is not a known key.
    """
    return sorted(entries, key=_SORT_KEYS[sort])


def total_pages(total_items: int, page_size: int) -> int:
    """Number of pages needed for ``total_items``, 0 when there is nothing to show."""
    return math.ceil(total_items / page_size)


def paginate(entries: Sequence[Entry], page: int, page_size: int) -> list[Entry]:
    """Slice out the 1-based ``page`` of ``entries``."""
    start = (page - 1) * page_size
    return list(entries[start : start + page_size])


def compose_results(
    entries: Iterable[Entry],
    filters: FilterState,
    favorites: Collection[int],
    page_size: int,
    branch: Branch | None = None,
) -> ComposedResult:
    """Sort, re-filter and paginate fetched entries.

    The default list is paginated by the remote source already, so its whole batch is
    one page here. Every other branch is paginated client-side with ``filters.page``.

    Args:
        entries: Entries fetched for the candidate ids.
        filters: Current filter state.
        favorites: Current favorite ids.
        page_size: Entries per page.
        branch: Branch that produced the candidates, derived from ``filters`` if omitted.

    Returns:
        The page to show with total item and page counts.
    """
    if branch is None:
        branch = select_branch(filters)

    result = sort_entries(entries, filters.sort)
    if filters.favorites_only:
        result = [entry for entry in result if entry.id in favorites]

    page = 1 if branch is Branch.DEFAULT_LIST else filters.page
    page_entries = paginate(result, page, page_size)
    return ComposedResult(
        entries=tuple(page_entries),
        total_items=len(result),
        total_pages=total_pages(len(result), page_size),
    )


def is_search_not_found(
    filters: FilterState,
    search_completed: bool,
    search_result: Entry | None,
    type_member_ids: Collection[int] | None = None,
) -> bool:
    """Whether the list view should show the "no match" state for the current search.

    True when a search has completed and either found nothing or found an entry that the
    active type filter excludes.
    """
    if not filters.query or not search_completed:
        return False
    if search_result is None:
        return True
    return bool(filters.type_name) and type_member_ids is not None and search_result.id not in type_member_ids
