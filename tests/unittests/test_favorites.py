# ABOUTME: Tests for catalog/favorites.py parsing, store and backends.
# ABOUTME: Verifies idempotent add/remove, persistence and tolerance of storage failures.

import json
from pathlib import Path
from typing import Any

import pytest

from pokecatalog.catalog.favorites import (
    FavoritesStore,
    FileFavoritesBackend,
    MemoryFavoritesBackend,
    parse_favorites,
)
from pokecatalog.gateway.errors import PersistenceError


class BrokenBackend:
    """Backend whose every operation fails."""

    def read(self) -> Any:
        raise PersistenceError("storage unavailable")

    def write(self, ids: list[int]) -> None:
        raise PersistenceError("storage unavailable")


class TestParseFavorites:
    """Tests for parse_favorites function."""

    def test_none_returns_empty(self) -> None:
        """Nothing stored means no favorites."""
        assert parse_favorites(None) == set()

    def test_json_string(self) -> None:
        """A JSON array string is parsed."""
        assert parse_favorites("[1, 4, 7]") == {1, 4, 7}

    def test_decoded_list(self) -> None:
        """An already decoded list is accepted."""
        assert parse_favorites([25, 25, 150]) == {25, 150}

    def test_malformed_json_returns_empty(self) -> None:
        """Malformed JSON is treated as empty."""
        assert parse_favorites("[1, 2") == set()

    def test_non_list_returns_empty(self) -> None:
        """A JSON value that is not an array is treated as empty."""
        assert parse_favorites('{"ids": [1]}') == set()

    def test_invalid_items_dropped(self) -> None:
        """Items that are not positive integers are discarded."""
        assert parse_favorites([1, "2", 0, -3, True, 4.0, 5]) == {1, 5}


class TestFavoritesStore:
    """Tests for FavoritesStore."""

    def test_load_reads_backend(self) -> None:
        """Load hydrates the set from the backend."""
        store = FavoritesStore(MemoryFavoritesBackend("[4, 1]"))

        result = store.load()

        assert result == frozenset({1, 4})
        assert 4 in store
        assert len(store) == 2

    def test_add_is_idempotent(self) -> None:
        """Adding an existing favorite changes nothing."""
        store = FavoritesStore(MemoryFavoritesBackend())
        store.load()

        store.add(25)
        result = store.add(25)

        assert result == frozenset({25})

    def test_remove_is_idempotent(self) -> None:
        """Removing a non-favorite changes nothing."""
        store = FavoritesStore(MemoryFavoritesBackend("[1]"))
        store.load()

        result = store.remove(99)

        assert result == frozenset({1})

    def test_toggle(self) -> None:
        """Toggling flips membership and reports the new state."""
        store = FavoritesStore(MemoryFavoritesBackend())
        store.load()

        assert store.toggle(7) is True
        assert store.contains(7)
        assert store.toggle(7) is False
        assert not store.contains(7)

    def test_changes_are_persisted_sorted(self) -> None:
        """Every change writes the full sorted list."""
        backend = MemoryFavoritesBackend()
        store = FavoritesStore(backend)
        store.load()

        store.add(7)
        store.add(1)
        store.add(4)

        assert json.loads(backend.raw) == [1, 4, 7]

    def test_survives_reload(self) -> None:
        """A fresh store over the same backend sees earlier changes."""
        backend = MemoryFavoritesBackend()
        first = FavoritesStore(backend)
        first.load()
        first.add(150)

        second = FavoritesStore(backend)

        assert second.load() == frozenset({150})

    def test_read_failure_starts_empty(self) -> None:
        """A failing backend yields an empty set instead of an error."""
        store = FavoritesStore(BrokenBackend())

        assert store.load() == frozenset()

    def test_write_failure_keeps_session_state(self) -> None:
        """A failing write is logged and the in-memory change stands."""
        store = FavoritesStore(BrokenBackend())
        store.load()

        result = store.add(3)

        assert result == frozenset({3})


class TestFileFavoritesBackend:
    """Tests for FileFavoritesBackend."""

    def test_missing_file_reads_none(self, tmp_path: Path) -> None:
        """A missing file means nothing was stored."""
        backend = FileFavoritesBackend(tmp_path / "favorites.json")

        assert backend.read() is None

    def test_write_creates_parent_dirs(self, tmp_path: Path) -> None:
        """Writing creates missing directories."""
        path = tmp_path / "nested" / "favorites.json"
        backend = FileFavoritesBackend(path)

        backend.write([1, 2])

        assert json.loads(path.read_text(encoding="utf-8")) == [1, 2]

    def test_store_round_trip(self, tmp_path: Path) -> None:
        """A store over a file backend persists across instances."""
        path = tmp_path / "favorites.json"
        store = FavoritesStore(FileFavoritesBackend(path))
        store.load()
        store.add(25)

        reloaded = FavoritesStore(FileFavoritesBackend(path))

        assert reloaded.load() == frozenset({25})

    def test_unwritable_path_raises(self, tmp_path: Path) -> None:
        """Write failures surface as PersistenceError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        backend = FileFavoritesBackend(blocker / "favorites.json")

        with pytest.raises(PersistenceError):
            backend.write([1])
