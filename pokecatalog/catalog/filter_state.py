"""ABOUTME: Filter state for the list view and its lossless query-string encoding.
ABOUTME: Pure codec plus a URL-synchronised store over a pluggable navigation location."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Protocol
from urllib.parse import parse_qsl, urlencode

logger = logging.getLogger(__name__)

SORT_KEYS: tuple[str, ...] = ("id", "name", "height", "weight")
"""Valid sort keys; ``id`` is the default and the tie-break of every other key."""

ALL_TYPES = "all"
"""Type value accepted on decode as an explicit spelling of "no type filter"."""

# Query-string key for each FilterState field
PARAM_KEYS: dict[str, str] = {
    "query": "query",
    "type_name": "type",
    "sort": "sort",
    "page": "page",
    "favorites_only": "favorites",
}


@dataclass(frozen=True)
class FilterState:
    """What the list view fetches and displays.

    Attributes:
        query: Free-text search, empty when not searching.
        type_name: Selected type, empty for all types.
        sort: One of SORT_KEYS.
        page: 1-based page number, never below 1.
        favorites_only: Show only favorited entries.
    """

    query: str = ""
    type_name: str = ""
    sort: str = "id"
    page: int = 1
    favorites_only: bool = False

    def __post_init__(self) -> None:
        if self.sort not in SORT_KEYS:
            raise ValueError(f"Unknown sort key {self.sort!r}, expected one of {', '.join(SORT_KEYS)}")
        if self.page < 1:
            raise ValueError(f"Page must be >= 1, got {self.page}")

    @property
    def has_active_filters(self) -> bool:
        """True if anything but the page differs from the defaults."""
        return bool(self.query or self.type_name or self.favorites_only or self.sort != "id")


DEFAULT_FILTERS = FilterState()


def _parse_page(raw: str | None) -> int:
    if raw is None:
        return 1
    try:
        page = int(raw)
    except ValueError:
        logger.debug("Ignoring invalid page parameter %r", raw)
        return 1
    return max(page, 1)


def decode_filters(params: Mapping[str, str]) -> FilterState:
    """Decode query-string parameters into a FilterState.

    Missing or invalid values fall back to their defaults; unrelated keys are ignored.

    Args:
        params: Query-string parameters, e.g. ``{"type": "fire", "page": "2"}``.

    Returns:
        The decoded filter state.
    """
    type_name = params.get("type", "")
    if type_name == ALL_TYPES:
        type_name = ""

    sort = params.get("sort", "id")
    if sort not in SORT_KEYS:
        logger.debug("Ignoring unknown sort parameter %r", sort)
        sort = "id"

    return FilterState(
        query=params.get("query", ""),
        type_name=type_name,
        sort=sort,
        page=_parse_page(params.get("page")),
        favorites_only=params.get("favorites") == "true",
    )


def encode_filters(state: FilterState) -> dict[str, str]:
    """Encode a FilterState as query-string parameters, omitting default values.

    Args:
        state: Filter state to encode.

    Returns:
        Dict with only the non-default fields, keyed by their query-string names.
    """
    params: dict[str, str] = {}
    if state.query:
        params["query"] = state.query
    if state.type_name and state.type_name != ALL_TYPES:
        params["type"] = state.type_name
    if state.sort != "id":
        params["sort"] = state.sort
    if state.page != 1:
        params["page"] = str(state.page)
    if state.favorites_only:
        params["favorites"] = "true"
    return params


def query_string(state: FilterState) -> str:
    """Shareable query string for ``state``, e.g. ``?type=fire&page=2``; empty for the defaults."""
    params = encode_filters(state)
    return f"?{urlencode(params)}" if params else ""


def parse_query_string(raw: str) -> FilterState:
    """Decode a query string or full URL as produced by query_string."""
    _, _, query = raw.partition("?") if "?" in raw else ("", "", raw)
    return decode_filters(dict(parse_qsl(query, keep_blank_values=True)))


def apply_update(state: FilterState, **changes: Any) -> FilterState:
    """Merge ``changes`` over ``state``.

    Changing any field other than ``page`` sends the user back to page 1, even if a page
    was passed alongside it. Pages below 1 are clamped to 1.

    Args:
        state: Current filter state.
        **changes: FilterState field names and their new values.

    Returns:
        The new filter state.

    Raises:
        TypeError: If a key is not a FilterState field.
        ValueError: If the sort key is unknown.
    """
    known = {f.name for f in fields(FilterState)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"Unknown filter fields: {', '.join(sorted(unknown))}")

    if "page" in changes:
        changes["page"] = max(int(changes["page"]), 1)
    if any(key != "page" for key in changes):
        changes["page"] = 1

    return replace(state, **changes)


class Location(Protocol):
    """A navigable location whose query parameters can be read and replaced."""

    def get_params(self) -> Mapping[str, str]:
        """Current query parameters."""
        ...

    def set_params(self, params: Mapping[str, str]) -> None:
        """Navigate to the same location with ``params`` as its query parameters."""
        ...


class MemoryLocation:
    """In-memory Location with a navigation history, for the CLI and tests."""

    def __init__(self, params: Mapping[str, str] | None = None) -> None:
        self.history: list[dict[str, str]] = [dict(params or {})]

    def get_params(self) -> Mapping[str, str]:
        return dict(self.history[-1])

    def set_params(self, params: Mapping[str, str]) -> None:
        self.history.append(dict(params))

    def back(self) -> None:
        """Return to the previous location, if any."""
        if len(self.history) > 1:
            self.history.pop()


class UrlFilterState:
    """Filter state whose single source of truth is a navigable location."""

    def __init__(self, location: Location) -> None:
        self.location = location

    def read(self) -> FilterState:
        """Decode the current location into a FilterState."""
        return decode_filters(self.location.get_params())

    def apply(self, **changes: Any) -> FilterState:
        """Apply ``changes`` and navigate to the resulting location.

        Query parameters that are not filter fields (e.g. the detail view's ``id``) are kept.
        Nothing is re-rendered here; consumers re-read the location.

        Returns:
            The new filter state.
        """
        current = self.location.get_params()
        new_state = apply_update(decode_filters(current), **changes)

        params = {key: value for key, value in current.items() if key not in PARAM_KEYS.values()}
        params.update(encode_filters(new_state))
        self.location.set_params(params)
        return new_state

    def reset(self) -> FilterState:
        """Clear every filter ("Clear All")."""
        return self.apply(**{f.name: getattr(DEFAULT_FILTERS, f.name) for f in fields(FilterState)})
