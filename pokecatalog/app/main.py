"""ABOUTME: Streamlit application for browsing the Pokemon catalog.
ABOUTME: List view with search, type, sort, favorites and pagination, plus a detail view per entry."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import TypeVar

import streamlit as st

from pokecatalog.app.browser_storage import BrowserFavoritesBackend
from pokecatalog.app.components import (
    render_empty_state,
    render_entry_card,
    render_error_state,
    render_favorite_button,
    render_pagination,
    render_stat_bars,
    render_type_badges,
)
from pokecatalog.app.query_params import StreamlitQueryParams, close_detail, get_detail_id, open_detail
from pokecatalog.catalog.controller import CatalogController, CatalogView
from pokecatalog.catalog.debounce import DebouncedInput
from pokecatalog.catalog.favorites import FavoritesStore
from pokecatalog.catalog.filter_state import SORT_KEYS, FilterState, UrlFilterState
from pokecatalog.gateway.client import PokeApiGateway
from pokecatalog.gateway.errors import CatalogError
from pokecatalog.logs import init_logging
from pokecatalog.settings import settings
from pokecatalog.utils.formatting import (
    format_entry_number,
    format_height,
    format_name,
    format_weight,
)

T = TypeVar("T")

SORT_LABELS = {
    "id": "ID (Default)",
    "name": "Name (A-Z)",
    "height": "Height (Tallest)",
    "weight": "Weight (Heaviest)",
}

GRID_COLUMNS = 4


@st.cache_resource
def _configure_logging() -> None:
    """Apply the logging config once per Streamlit process."""
    init_logging()


def _get_favorites() -> FavoritesStore:
    """Session favorites store backed by browser localStorage."""
    store: FavoritesStore | None = st.session_state.get("favorites")
    if store is None:
        store = FavoritesStore(BrowserFavoritesBackend())
        st.session_state["favorites"] = store
    return store


def _hydrate_favorites() -> None:
    """Load favorites from localStorage, once per rerun until it succeeds.

    The localStorage component may not have delivered its value on the first render, so
    loading is retried on later reruns until favorites show up or the user changes them.
    """
    store = _get_favorites()
    if not st.session_state.get("_favorites_hydrated"):
        if st.session_state.get("_favorites_touched"):
            st.session_state["_favorites_hydrated"] = True
        elif store.load():
            st.session_state["_favorites_hydrated"] = True


def _get_controller() -> CatalogController:
    controller: CatalogController | None = st.session_state.get("controller")
    if controller is None:
        controller = CatalogController(_get_favorites())
        st.session_state["controller"] = controller
    return controller


def _run(fetch: Callable[[PokeApiGateway], Awaitable[T]]) -> T:
    """Run ``fetch`` against a fresh gateway on a private event loop."""

    async def runner() -> T:
        async with PokeApiGateway() as gateway:
            return await fetch(gateway)

    return asyncio.run(runner())


url_state = UrlFilterState(StreamlitQueryParams())


def _navigate(**changes: object) -> None:
    url_state.apply(**changes)
    st.rerun()


def _open_entry(entry_id: int) -> None:
    open_detail(entry_id)
    st.rerun()


def _back_to_list() -> None:
    close_detail()
    st.rerun()


def _retry(kind: str | None) -> None:
    _get_controller().retry(kind)
    st.rerun()


@st.fragment(run_every=timedelta(seconds=settings.SEARCH_DEBOUNCE_SECONDS / 2))
def _search_box() -> None:
    """Search input that commits to the URL once it has been stable for the debounce delay."""
    committed_query = url_state.read().query
    debouncer: DebouncedInput | None = st.session_state.get("search_debouncer")
    if debouncer is None:
        debouncer = DebouncedInput(committed=committed_query)
        st.session_state["search_debouncer"] = debouncer

    if debouncer.committed != committed_query:
        # The filters changed elsewhere (e.g. "Clear All"), that wins over pending input
        debouncer.sync(committed_query)
        st.session_state["search_box"] = committed_query
    elif "search_box" not in st.session_state:
        st.session_state["search_box"] = debouncer.value

    st.text_input(
        "Search",
        key="search_box",
        placeholder="Search Pokémon by name or ID...",
        on_change=lambda: debouncer.type(st.session_state["search_box"]),
    )

    commit = debouncer.poll()
    if commit is not None:
        _navigate(query=commit)


def _render_filter_bar(filters: FilterState) -> None:
    try:
        type_names = _run(_get_controller().load_type_names)
    except CatalogError:
        type_names = []
        render_error_state(
            "Failed to load types",
            "We couldn't fetch the list of types. Please check your connection and try again.",
            on_retry=lambda: _retry("types"),
            key="types_error",
        )

    search_col, type_col, sort_col, fav_col, clear_col = st.columns([4, 2, 2, 1, 1], vertical_alignment="bottom")
    with search_col:
        _search_box()

    type_options = ["", *type_names]
    if filters.type_name and filters.type_name not in type_options:
        type_options.append(filters.type_name)
    selected_type = type_col.selectbox(
        "Type",
        options=type_options,
        index=type_options.index(filters.type_name),
        format_func=lambda name: format_name(name) if name else "All Types",
    )
    if selected_type != filters.type_name:
        _navigate(type_name=selected_type)

    selected_sort = sort_col.selectbox(
        "Sort",
        options=list(SORT_KEYS),
        index=SORT_KEYS.index(filters.sort),
        format_func=SORT_LABELS.__getitem__,
    )
    if selected_sort != filters.sort:
        _navigate(sort=selected_sort)

    favorites_only = fav_col.toggle("Favorites", value=filters.favorites_only)
    if favorites_only != filters.favorites_only:
        _navigate(favorites_only=favorites_only)

    if filters.has_active_filters and clear_col.button("Clear All", key="clear_all"):
        url_state.reset()
        st.rerun()


def _render_results(view: CatalogView) -> None:
    filters = view.filters

    if view.error is not None:
        render_error_state(
            "Failed to load Pokémon",
            "We couldn't fetch the Pokémon data. Please check your connection and try again.",
            on_retry=lambda: _retry(view.retry_kind),
        )
        return

    if view.search_not_found:
        if filters.type_name:
            message = (
                f'We couldn\'t find any Pokémon matching "{filters.query}" in the '
                f"{format_name(filters.type_name)} type. Try a different search term or clear the type filter."
            )
        else:
            message = f'We couldn\'t find any Pokémon matching "{filters.query}". Please check the spelling and try again.'
        render_empty_state("No Pokémon found", message)
        cols = st.columns(2)
        if cols[0].button("Clear Search", key="clear_search"):
            _navigate(query="")
        if filters.type_name and cols[1].button("Clear Type Filter", key="clear_type"):
            _navigate(type_name="")
        return

    if not view.entries:
        if filters.favorites_only:
            render_empty_state("No favorites yet", "Start exploring and add some Pokémon to your favorites!")
        else:
            render_empty_state("No results", "Try adjusting your filters to see more results.")
        return

    for row_start in range(0, len(view.entries), GRID_COLUMNS):
        cols = st.columns(GRID_COLUMNS)
        for col, entry in zip(cols, view.entries[row_start : row_start + GRID_COLUMNS], strict=False):
            with col:
                render_entry_card(entry, _get_favorites(), on_open=_open_entry)

    render_pagination(filters.page, view.navigable_pages, on_change=lambda page: _navigate(page=page))


def render_list_view() -> None:
    """Search, filter bar, result grid and pagination."""
    st.title("Pokémon")
    filters = url_state.read()
    controller = _get_controller()
    _render_filter_bar(filters)

    with st.spinner("Loading Pokémon..."):
        view = _run(lambda gateway: controller.load(gateway, filters))
    if view is None:
        view = controller.view
    if view is not None:
        _render_results(view)


def render_detail_view(id_or_name: str) -> None:
    """Full details of one entry, with a way back to the list."""
    if st.button("Back", icon=":material/arrow_back:", key="detail_back"):
        _back_to_list()

    try:
        with st.spinner("Loading Pokémon..."):
            entry = _run(lambda gateway: _get_controller().load_entry(gateway, id_or_name))
    except CatalogError:
        render_error_state(
            "Pokémon not found",
            "We couldn't find the Pokémon you're looking for. It might have been moved or doesn't exist.",
            on_retry=lambda: _retry("entry"),
            on_home=_back_to_list,
        )
        return

    header_cols = st.columns([0.85, 0.15])
    with header_cols[0]:
        st.caption(format_entry_number(entry.id))
        st.title(format_name(entry.name))
        render_type_badges(entry.type_names)
    with header_cols[1]:
        render_favorite_button(entry, _get_favorites(), key_prefix="detail")

    image_col, stats_col = st.columns(2)
    image_col.image(entry.artwork_url(settings.placeholder_image_path), width="stretch")
    with stats_col:
        st.subheader("Base Stats")
        render_stat_bars(entry)

    detail_cols = st.columns(4)
    detail_cols[0].metric("Height", format_height(entry.height))
    detail_cols[1].metric("Weight", format_weight(entry.weight))
    detail_cols[2].metric("Base Experience", entry.base_experience if entry.base_experience else "N/A")
    detail_cols[3].metric("Abilities", len(entry.abilities))

    st.subheader("Abilities")
    for ability in entry.abilities:
        suffix = " *(hidden)*" if ability.is_hidden else ""
        st.markdown(f"- {format_name(ability.ability.name)}{suffix}")


def main() -> None:
    """Render the page selected by the current URL."""
    st.set_page_config(
        page_title="Pokédex Explorer",
        page_icon=":material/catching_pokemon:",
        layout="wide",
    )
    _configure_logging()
    _hydrate_favorites()

    detail_id = get_detail_id()
    if detail_id is not None:
        render_detail_view(detail_id)
    else:
        render_list_view()


if __name__ == "__main__":
    main()
