"""ABOUTME: Entry point for Streamlit Community Cloud deployment.
ABOUTME: Delegates to the main app module on every rerun."""

from pokecatalog.app.main import main

main()
