"""ABOUTME: Reusable UI components for the catalog list and detail views.
ABOUTME: Cards, type badges, stat bars, pagination and loading/error/empty placeholders."""

from collections.abc import Callable

import streamlit as st

from pokecatalog.catalog.favorites import FavoritesStore
from pokecatalog.catalog.pagination import jump_targets, visible_pages
from pokecatalog.gateway.schemas import Entry
from pokecatalog.settings import settings
from pokecatalog.utils.formatting import (
    format_entry_number,
    format_height,
    format_name,
    format_stat_name,
    format_weight,
    type_color,
)


def render_type_badges(type_names: list[str]) -> None:
    """Render types as coloured badges on one line."""
    badges = " ".join(
        f'<span style="background:{type_color(name)};color:white;padding:2px 10px;'
        f'border-radius:999px;font-size:0.8rem;">{format_name(name)}</span>'
        for name in type_names
    )
    st.markdown(badges, unsafe_allow_html=True)


def render_favorite_button(entry: Entry, favorites: FavoritesStore, key_prefix: str) -> None:
    """Heart toggle adding or removing ``entry`` from the favorites."""
    is_favorite = favorites.contains(entry.id)
    label = ":material/favorite:" if is_favorite else ":material/favorite_border:"
    help_text = "Remove from favorites" if is_favorite else "Add to favorites"
    if st.button(label, key=f"{key_prefix}_fav_{entry.id}", help=help_text):
        favorites.toggle(entry.id)
        st.session_state["_favorites_touched"] = True
        st.rerun()


def render_entry_card(entry: Entry, favorites: FavoritesStore, on_open: Callable[[int], None]) -> None:
    """Render one entry as a card with artwork, number, types and size.

    Args:
        entry: Entry to render.
        favorites: Store used for the heart toggle.
        on_open: Called with the entry id when the card's details button is clicked.
    """
    with st.container(border=True):
        head_cols = st.columns([0.75, 0.25])
        head_cols[0].caption(format_entry_number(entry.id))
        with head_cols[1]:
            render_favorite_button(entry, favorites, key_prefix="card")

        st.image(entry.artwork_url(settings.placeholder_image_path), width="stretch")
        st.markdown(f"**{format_name(entry.name)}**")
        render_type_badges(entry.type_names)

        size_cols = st.columns(2)
        size_cols[0].metric("Height", format_height(entry.height))
        size_cols[1].metric("Weight", format_weight(entry.weight))

        if st.button("Details", key=f"open_{entry.id}", width="stretch"):
            on_open(entry.id)


def render_stat_bars(entry: Entry) -> None:
    """Base stats as labelled progress bars scaled to the highest stat, plus the total."""
    if not entry.stats:
        st.caption("No base stats available.")
        return

    max_stat = max(stat.base_stat for stat in entry.stats) or 1
    for stat in entry.stats:
        cols = st.columns([0.3, 0.1, 0.6])
        cols[0].write(format_stat_name(stat.stat.name))
        cols[1].write(str(stat.base_stat))
        cols[2].progress(stat.base_stat / max_stat)

    st.markdown(f"**Total:** {entry.stat_total}")


def render_pagination(current: int, total: int, on_change: Callable[[int], None], disabled: bool = False) -> None:
    """Pagination control with first/previous/next/last, a page window and quick jumps.

    Renders nothing when there is at most one page.
    """
    if total <= 1:
        return

    pages = visible_pages(current, total)
    cols = st.columns(len(pages) + 4)

    if cols[0].button(":material/first_page:", key="page_first", disabled=disabled or current <= 1):
        on_change(1)
    if cols[1].button(":material/chevron_left:", key="page_prev", disabled=disabled or current <= 1):
        on_change(current - 1)

    for index, page in enumerate(pages):
        col = cols[index + 2]
        if page is None:
            col.write("…")
        elif col.button(
            str(page),
            key=f"page_{page}",
            type="primary" if page == current else "secondary",
            disabled=disabled,
        ):
            on_change(page)

    if cols[-2].button(":material/chevron_right:", key="page_next", disabled=disabled or current >= total):
        on_change(current + 1)
    if cols[-1].button(":material/last_page:", key="page_last", disabled=disabled or current >= total):
        on_change(total)

    st.progress(current / total, text=f"Page {current} of {total}")

    targets = jump_targets(current, total)
    if targets:
        jump_cols = st.columns(len(targets) + 1)
        jump_cols[0].caption("Jump to:")
        for col, page in zip(jump_cols[1:], targets, strict=True):
            if col.button(str(page), key=f"jump_{page}"):
                on_change(page)


def render_error_state(
    title: str,
    message: str,
    on_retry: Callable[[], None],
    on_home: Callable[[], None] | None = None,
    key: str = "error",
) -> None:
    """Error panel with a retry action and, optionally, a way back to the list.

    Args:
        title: Bold heading of the panel.
        message: Explanation shown below the heading.
        on_retry: Called when "Try Again" is clicked.
        on_home: Called when "Go Home" is clicked, the button is hidden if None.
        key: Widget key prefix, unique per panel on a page.
    """
    st.error(f"**{title}**\n\n{message}")
    cols = st.columns(2)
    if cols[0].button("Try Again", key=f"{key}_retry", icon=":material/refresh:"):
        on_retry()
    if on_home is not None and cols[1].button("Go Home", key=f"{key}_home", icon=":material/home:"):
        on_home()


def render_empty_state(title: str, message: str) -> None:
    """Informational panel for views without results."""
    st.info(f"**{title}**\n\n{message}")
