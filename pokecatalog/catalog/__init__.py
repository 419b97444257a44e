"""ABOUTME: Catalog package with the filter, favorites and result composition logic.
ABOUTME: Free of any UI dependency so the Streamlit app and the CLI share it."""

from pokecatalog.catalog.composer import (
    Branch,
    compose_results,
    is_search_not_found,
    resolve_candidates,
    sort_entries,
    total_pages,
)
from pokecatalog.catalog.controller import CatalogController, CatalogView
from pokecatalog.catalog.favorites import (
    FavoritesStore,
    FileFavoritesBackend,
    MemoryFavoritesBackend,
    parse_favorites,
)
from pokecatalog.catalog.fetch_cache import FetchCache
from pokecatalog.catalog.filter_state import (
    FilterState,
    MemoryLocation,
    UrlFilterState,
    apply_update,
    decode_filters,
    encode_filters,
)

__all__ = [
    "Branch",
    "CatalogController",
    "CatalogView",
    "FavoritesStore",
    "FetchCache",
    "FileFavoritesBackend",
    "FilterState",
    "MemoryFavoritesBackend",
    "MemoryLocation",
    "UrlFilterState",
    "apply_update",
    "compose_results",
    "decode_filters",
    "encode_filters",
    "is_search_not_found",
    "parse_favorites",
    "resolve_candidates",
    "sort_entries",
    "total_pages",
]
