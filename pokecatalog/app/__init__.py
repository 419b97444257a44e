# ABOUTME: Streamlit presentation layer for the catalog.
# ABOUTME: List and detail views, browser favorites storage and query-param navigation.
