"""Contains configurations for the test run."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pokecatalog.gateway.schemas import Entry

API = "https://pokeapi.co/api/v2"

EntryFactory = Callable[..., Entry]
PayloadFactory = Callable[..., dict[str, Any]]


@pytest.fixture(scope="session")
def resources_folder() -> Path:
    """Returns the path to the test resources folder."""
    return Path(__file__).parents[1] / "resources"


@pytest.fixture(scope="session")
def pikachu_payload(resources_folder: Path) -> dict[str, Any]:
    """Trimmed detail payload of entry 25 as served by the PokeAPI."""
    return json.loads((resources_folder / "pikachu.json").read_text(encoding="utf-8"))


@pytest.fixture
def entry_payload() -> PayloadFactory:
    """Build a detail endpoint payload with sensible defaults."""

    def _build(
        entry_id: int,
        name: str | None = None,
        types: tuple[str, ...] = ("normal",),
        height: int = 10,
        weight: int = 100,
    ) -> dict[str, Any]:
        return {
            "id": entry_id,
            "name": name or f"mon-{entry_id}",
            "height": height,
            "weight": weight,
            "base_experience": 64,
            "types": [
                {"slot": slot, "type": {"name": type_name, "url": f"{API}/type/{slot}/"}}
                for slot, type_name in enumerate(types, start=1)
            ],
            "stats": [
                {"base_stat": 45, "effort": 0, "stat": {"name": "hp", "url": f"{API}/stat/1/"}},
                {"base_stat": 49, "effort": 0, "stat": {"name": "attack", "url": f"{API}/stat/2/"}},
            ],
            "abilities": [
                {"ability": {"name": "overgrow", "url": f"{API}/ability/65/"}, "is_hidden": False, "slot": 1},
            ],
            "sprites": {"front_default": f"https://img.example/{entry_id}.png", "other": {}},
        }

    return _build


@pytest.fixture
def make_entry(entry_payload: PayloadFactory) -> EntryFactory:
    """Build a validated Entry."""

    def _build(entry_id: int, **kwargs: Any) -> Entry:
        return Entry.model_validate(entry_payload(entry_id, **kwargs))

    return _build


@pytest.fixture
def list_payload() -> Callable[[list[int], int], dict[str, Any]]:
    """Build a ``/pokemon`` list payload referencing ``ids``."""

    def _build(ids: list[int], count: int = 1302) -> dict[str, Any]:
        return {
            "count": count,
            "next": None,
            "previous": None,
            "results": [{"name": f"mon-{i}", "url": f"{API}/pokemon/{i}/"} for i in ids],
        }

    return _build


@pytest.fixture
def type_payload() -> Callable[[str, list[int]], dict[str, Any]]:
    """Build a ``/type/{name}`` payload whose members are ``ids``."""

    def _build(name: str, ids: list[int]) -> dict[str, Any]:
        return {
            "id": 10,
            "name": name,
            "pokemon": [{"pokemon": {"name": f"mon-{i}", "url": f"{API}/pokemon/{i}/"}, "slot": 1} for i in ids],
        }

    return _build
