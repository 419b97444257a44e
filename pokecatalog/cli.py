"""ABOUTME: CLI entry point for pokecatalog commands.
ABOUTME: Provides browse, show, types, favorite and ui commands via Typer."""

import asyncio
import logging
import subprocess
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import typer
from rich.console import Console
from rich.table import Table

from pokecatalog.catalog.controller import CatalogController, CatalogView
from pokecatalog.catalog.favorites import FavoritesStore, FileFavoritesBackend
from pokecatalog.catalog.filter_state import (
    SORT_KEYS,
    FilterState,
    MemoryLocation,
    UrlFilterState,
    encode_filters,
    parse_query_string,
    query_string,
)
from pokecatalog.gateway.client import PokeApiGateway
from pokecatalog.gateway.errors import CatalogError, NotFoundError
from pokecatalog.gateway.schemas import Entry
from pokecatalog.logs import init_logging
from pokecatalog.settings import settings
from pokecatalog.utils.formatting import (
    format_entry_number,
    format_height,
    format_name,
    format_stat_name,
    format_weight,
)

T = TypeVar("T")

app = typer.Typer(
    name="pokecatalog",
    help="Search, filter and favorite Pokemon from the PokeAPI.",
    no_args_is_help=True,
)
favorite_app = typer.Typer(help="Manage favorite Pokemon.", no_args_is_help=True)
app.add_typer(favorite_app, name="favorite")

console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")) -> None:
    """Configure logging before any command runs."""
    init_logging()
    if verbose:
        logging.getLogger("pokecatalog").setLevel(logging.DEBUG)


def _favorites_store() -> FavoritesStore:
    store = FavoritesStore(FileFavoritesBackend(settings.favorites_path))
    store.load()
    return store


def _run(fetch: Callable[[PokeApiGateway], Awaitable[T]]) -> T:
    async def runner() -> T:
        async with PokeApiGateway() as gateway:
            return await fetch(gateway)

    return asyncio.run(runner())


def _print_view(view: CatalogView, favorites: FavoritesStore) -> None:
    """Print one page of results as a table."""
    filters = view.filters
    if view.search_not_found:
        scope = f" in the {format_name(filters.type_name)} type" if filters.type_name else ""
        console.print(f'[yellow]No Pokémon found matching "{filters.query}"{scope}.[/]')
        return
    if not view.entries:
        message = "No favorites yet." if filters.favorites_only else "No results."
        console.print(f"[yellow]{message}[/]")
        return

    table = Table(title=f"Page {filters.page} of {max(view.navigable_pages, 1)}")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Types")
    table.add_column("Height", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Fav", justify="center")
    for entry in view.entries:
        table.add_row(
            format_entry_number(entry.id),
            format_name(entry.name),
            ", ".join(format_name(name) for name in entry.type_names),
            format_height(entry.height),
            format_weight(entry.weight),
            "♥" if favorites.contains(entry.id) else "",
        )
    console.print(table)
    console.print(f"{view.total_items} results")


def _print_entry(entry: Entry, favorites: FavoritesStore) -> None:
    heart = " [red]♥[/]" if favorites.contains(entry.id) else ""
    console.print(f"[bold]{format_entry_number(entry.id)} {format_name(entry.name)}[/]{heart}")
    console.print(f"Types: {', '.join(format_name(name) for name in entry.type_names)}")
    console.print(f"Height: {format_height(entry.height)}  Weight: {format_weight(entry.weight)}")
    console.print(f"Base experience: {entry.base_experience if entry.base_experience else 'N/A'}")

    stats = Table(title="Base Stats")
    stats.add_column("Stat")
    stats.add_column("Value", justify="right")
    for stat in entry.stats:
        stats.add_row(format_stat_name(stat.stat.name), str(stat.base_stat))
    stats.add_row("[bold]Total[/]", f"[bold]{entry.stat_total}[/]")
    console.print(stats)

    abilities = [
        f"{format_name(ability.ability.name)}{' (hidden)' if ability.is_hidden else ''}" for ability in entry.abilities
    ]
    console.print(f"Abilities: {', '.join(abilities)}")


@app.command()
def browse(
    query: str = typer.Option("", "--query", "-q", help="Search by exact name or id"),
    type_name: str = typer.Option("", "--type", "-t", help="Only show Pokemon of this type"),
    sort: str = typer.Option("id", "--sort", "-s", help=f"Sort key: {', '.join(SORT_KEYS)}"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    favorites_only: bool = typer.Option(False, "--favorites", "-f", help="Only show favorites"),
    from_url: str | None = typer.Option(None, "--from-url", help="Start from a shared query string or URL"),
) -> None:
    """List Pokemon with search, type filter, sorting and pagination."""
    if sort not in SORT_KEYS:
        console.print(f"[red]Error:[/] Unknown sort key {sort!r}, expected one of {', '.join(SORT_KEYS)}")
        raise typer.Exit(1)

    base = parse_query_string(from_url) if from_url else FilterState()
    url_state = UrlFilterState(MemoryLocation(encode_filters(base)))

    changes: dict[str, object] = {}
    if query:
        changes["query"] = query
    if type_name:
        changes["type_name"] = type_name
    if sort != "id":
        changes["sort"] = sort
    if favorites_only:
        changes["favorites_only"] = True
    if changes:
        url_state.apply(**changes)
    if page != 1:
        url_state.apply(page=page)
    filters = url_state.read()

    favorites = _favorites_store()
    controller = CatalogController(favorites)
    view = _run(lambda gateway: controller.load(gateway, filters))
    if view is None:
        console.print("[red]Error:[/] Load was cancelled")
        raise typer.Exit(1)
    if view.error is not None:
        console.print(f"[red]Error fetching data:[/] {view.error}")
        raise typer.Exit(1)

    _print_view(view, favorites)
    shared = query_string(filters)
    if shared:
        console.print(f"[blue]Share:[/] {shared}")


@app.command()
def show(id_or_name: str = typer.Argument(..., help="Pokemon id or name")) -> None:
    """Show the details of one Pokemon."""
    favorites = _favorites_store()
    controller = CatalogController(favorites)
    try:
        entry = _run(lambda gateway: controller.load_entry(gateway, id_or_name))
    except NotFoundError:
        console.print(f"[red]Error:[/] Pokémon {id_or_name!r} not found")
        raise typer.Exit(1) from None
    except CatalogError as e:
        console.print(f"[red]Error fetching data:[/] {e}")
        raise typer.Exit(1) from None
    _print_entry(entry, favorites)


@app.command()
def types() -> None:
    """List all Pokemon types."""
    controller = CatalogController(_favorites_store())
    try:
        names = _run(controller.load_type_names)
    except CatalogError as e:
        console.print(f"[red]Error fetching data:[/] {e}")
        raise typer.Exit(1) from None
    for name in names:
        console.print(f"  {name}")


@favorite_app.command("add")
def favorite_add(entry_id: int = typer.Argument(..., min=1, help="Pokemon id")) -> None:
    """Add a Pokemon to the favorites."""
    ids = _favorites_store().add(entry_id)
    console.print(f"[green]Added {format_entry_number(entry_id)}[/] ({len(ids)} favorites)")


@favorite_app.command("remove")
def favorite_remove(entry_id: int = typer.Argument(..., min=1, help="Pokemon id")) -> None:
    """Remove a Pokemon from the favorites."""
    ids = _favorites_store().remove(entry_id)
    console.print(f"[green]Removed {format_entry_number(entry_id)}[/] ({len(ids)} favorites)")


@favorite_app.command("list")
def favorite_list() -> None:
    """List favorite Pokemon ids."""
    ids = sorted(_favorites_store().ids)
    if not ids:
        console.print("[yellow]No favorites yet.[/]")
        return
    for entry_id in ids:
        console.print(f"  {format_entry_number(entry_id)}")


UI_APP_PATH = Path(__file__).parent / "app" / "main.py"


def _streamlit_command(port: int, headless: bool) -> list[str]:
    """Command line starting the catalog app in a Streamlit server."""
    command = [sys.executable, "-m", "streamlit", "run", str(UI_APP_PATH), "--server.port", str(port)]
    if headless:
        command += ["--server.headless", "true"]
    return command


@app.command()
def ui(
    port: int = typer.Option(8501, "--port", "-p", help="Port for the Streamlit server"),
    headless: bool = typer.Option(False, "--headless", help="Do not open a browser window"),
    from_url: str | None = typer.Option(None, "--from-url", help="Filters to open, as a shared query string or URL"),
) -> None:
    """Launch the Streamlit catalog UI."""
    filters = parse_query_string(from_url) if from_url else FilterState()
    console.print(f"[blue]Catalog UI:[/] http://localhost:{port}/{query_string(filters)}")

    try:
        # Every argument is built from typed options, nothing is passed through a shell
        result = subprocess.run(_streamlit_command(port, headless), check=False)  # noqa: S603
    except KeyboardInterrupt:
        console.print("\n[yellow]UI stopped.[/]")
        return
    if result.returncode != 0:
        console.print(f"[red]Streamlit exited with status {result.returncode}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
