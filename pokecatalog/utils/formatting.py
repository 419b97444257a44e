"""ABOUTME: Display helpers shared by the Streamlit views and the CLI.
ABOUTME: Formats names, stats and units, derives ids from resource urls and maps types to colours."""

STAT_LABELS: dict[str, str] = {
    "hp": "HP",
    "attack": "Attack",
    "defense": "Defense",
    "special-attack": "Sp. Attack",
    "special-defense": "Sp. Defense",
    "speed": "Speed",
}

TYPE_COLORS: dict[str, str] = {
    "normal": "#9ca3af",
    "fire": "#ef4444",
    "water": "#3b82f6",
    "electric": "#facc15",
    "grass": "#22c55e",
    "ice": "#93c5fd",
    "fighting": "#b91c1c",
    "poison": "#a855f7",
    "ground": "#ca8a04",
    "flying": "#60a5fa",
    "psychic": "#ec4899",
    "bug": "#4ade80",
    "rock": "#854d0e",
    "ghost": "#7e22ce",
    "dragon": "#9333ea",
    "dark": "#1f2937",
    "steel": "#4b5563",
    "fairy": "#f472b6",
}

DEFAULT_TYPE_COLOR = "#9ca3af"


def id_from_url(url: str) -> int:
    """Extract the numeric id from a PokeAPI resource url.

    The id is the last non-empty path segment, e.g. ``.../pokemon/25/`` yields 25.

    Args:
        url: Resource url as returned by list and type endpoints.

    Returns:
        The numeric id.

    Raises:
        ValueError: If the url does not end in a numeric segment.
    """
    segment = url.rstrip("/").rsplit("/", 1)[-1]
    if not segment.isdigit():
        raise ValueError(f"No numeric id in resource url: {url!r}")
    return int(segment)


def format_name(name: str) -> str:
    """Capitalize a slug-style name and turn its first hyphen into a space.

    Examples:
        >>> format_name("mr-mime")
        'Mr mime'
    """
    if not name:
        return name
    return name[0].upper() + name[1:].replace("-", " ", 1)


def format_stat_name(name: str) -> str:
    """Human readable label for a stat slug, falling back to format_name."""
    return STAT_LABELS.get(name, format_name(name))


def format_entry_number(entry_id: int) -> str:
    """Zero padded catalog number, e.g. ``#025``."""
    return f"#{entry_id:03d}"


def format_height(decimetres: int) -> str:
    """Height in metres with one decimal."""
    return f"{decimetres / 10:.1f}m"


def format_weight(hectograms: int) -> str:
    """Weight in kilograms with one decimal."""
    return f"{hectograms / 10:.1f}kg"


def type_color(type_name: str) -> str:
    """Badge colour for a type, grey for unknown types."""
    return TYPE_COLORS.get(type_name, DEFAULT_TYPE_COLOR)
