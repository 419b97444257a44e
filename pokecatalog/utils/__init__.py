# ABOUTME: Utils package for display helpers.
# ABOUTME: Contains name, stat and unit formatting shared by the app and the CLI.

from pokecatalog.utils.formatting import (
    format_entry_number,
    format_height,
    format_name,
    format_stat_name,
    format_weight,
    id_from_url,
    type_color,
)

__all__ = [
    "format_entry_number",
    "format_height",
    "format_name",
    "format_stat_name",
    "format_weight",
    "id_from_url",
    "type_color",
]
