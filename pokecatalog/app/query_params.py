# ABOUTME: Navigation adapter between the filter store and the browser URL.
# ABOUTME: Reads and writes st.query_params so every view is shareable and back/forward navigable.

from collections.abc import Mapping

import streamlit as st

DETAIL_PARAM = "id"
"""Query parameter selecting the detail view of one entry."""


class StreamlitQueryParams:
    """Location backed by the URL of the current Streamlit session."""

    def get_params(self) -> Mapping[str, str]:
        return {key: st.query_params[key] for key in st.query_params}

    def set_params(self, params: Mapping[str, str]) -> None:
        st.query_params.from_dict(dict(params))


def get_detail_id() -> str | None:
    """Entry id or name requested for the detail view, None on the list view."""
    value = st.query_params.get(DETAIL_PARAM)
    return value or None


def open_detail(entry_id: int) -> None:
    """Navigate to the detail view of ``entry_id``, keeping the list filters."""
    st.query_params[DETAIL_PARAM] = str(entry_id)


def close_detail() -> None:
    """Navigate back to the list view."""
    if DETAIL_PARAM in st.query_params:
        del st.query_params[DETAIL_PARAM]
