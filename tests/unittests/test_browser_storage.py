# ABOUTME: Tests for app/browser_storage.py localStorage backend.
# ABOUTME: Replaces the LocalStorage component with an in-memory fake.

import json
from typing import Any

import pytest

from pokecatalog.app import browser_storage
from pokecatalog.app.browser_storage import BrowserFavoritesBackend
from pokecatalog.catalog.favorites import FavoritesStore
from pokecatalog.gateway.errors import PersistenceError


class FakeLocalStorage:
    """In-memory stand-in for the streamlit_local_storage component.

    Like the real component, it copies the browser items when created and reads only
    from that copy afterwards.
    """

    items: dict[str, Any] = {}

    def __init__(self) -> None:
        self.stored_items = dict(self.items)

    def getItem(self, item_key: str) -> Any:  # noqa: N802
        return self.stored_items.get(item_key)

    def setItem(self, item_key: str, item_value: Any, key: str | None = None) -> None:  # noqa: N802
        self.items[item_key] = item_value
        self.stored_items[item_key] = item_value


class UnavailableLocalStorage:
    """Component that cannot be created outside a Streamlit session."""

    def __init__(self) -> None:
        raise RuntimeError("no script run context")


@pytest.fixture
def fake_storage(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Install the fake component and return its backing dict."""
    items: dict[str, Any] = {}
    monkeypatch.setattr(FakeLocalStorage, "items", items)
    monkeypatch.setattr(browser_storage, "LocalStorage", FakeLocalStorage)
    return items


class TestBrowserFavoritesBackend:
    """Tests for BrowserFavoritesBackend."""

    def test_write_stores_json_array(self, fake_storage: dict[str, Any]) -> None:
        """Favorites are stored as a JSON array under the configured key."""
        backend = BrowserFavoritesBackend(storage_key="pokemon-favorites")

        backend.write([1, 4])

        assert json.loads(fake_storage["pokemon-favorites"]) == [1, 4]

    def test_read_missing_key(self, fake_storage: dict[str, Any]) -> None:
        """Nothing stored reads as None."""
        backend = BrowserFavoritesBackend(storage_key="pokemon-favorites")

        assert backend.read() is None

    def test_store_hydrates_from_browser(self, fake_storage: dict[str, Any]) -> None:
        """A store over the backend loads what the browser holds."""
        fake_storage["pokemon-favorites"] = "[25, 150]"
        store = FavoritesStore(BrowserFavoritesBackend(storage_key="pokemon-favorites"))

        assert store.load() == frozenset({25, 150})

    def test_store_sees_items_delivered_on_later_rerun(self, fake_storage: dict[str, Any]) -> None:
        """Favorites arriving after the first render are loaded and kept on the next change."""
        store = FavoritesStore(BrowserFavoritesBackend(storage_key="pokemon-favorites"))
        first_render = store.load()
        fake_storage["pokemon-favorites"] = "[1, 4]"

        second_render = store.load()
        store.add(7)

        assert first_render == frozenset()
        assert second_render == frozenset({1, 4})
        assert json.loads(fake_storage["pokemon-favorites"]) == [1, 4, 7]

    def test_unavailable_component_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Outside a Streamlit session reads fail with PersistenceError."""
        monkeypatch.setattr(browser_storage, "LocalStorage", UnavailableLocalStorage)
        backend = BrowserFavoritesBackend()

        with pytest.raises(PersistenceError):
            backend.read()

    def test_store_tolerates_unavailable_component(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The store starts empty and keeps working without localStorage."""
        monkeypatch.setattr(browser_storage, "LocalStorage", UnavailableLocalStorage)
        store = FavoritesStore(BrowserFavoritesBackend())

        store.load()
        result = store.add(7)

        assert result == frozenset({7})
