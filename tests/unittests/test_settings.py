"""ABOUTME: Tests for the settings module.
ABOUTME: Verifies defaults, environment overrides and derived paths."""

import pytest

from pokecatalog.settings import Settings


class TestSettings:
    """Tests for Settings class."""

    def test_defaults(self) -> None:
        """Defaults target the public PokeAPI with 20 entries per page."""
        config = Settings()

        assert config.API_BASE_URL == "https://pokeapi.co/api/v2"
        assert config.PAGE_SIZE == 20
        assert config.FAVORITES_STORAGE_KEY == "pokemon-favorites"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Prefixed environment variables override defaults."""
        monkeypatch.setenv("POKECATALOG_PAGE_SIZE", "12")
        monkeypatch.setenv("POKECATALOG_REQUEST_TIMEOUT", "2.5")

        config = Settings()

        assert config.PAGE_SIZE == 12
        assert config.REQUEST_TIMEOUT == 2.5

    def test_derived_paths(self) -> None:
        """Derived paths live under the project root and the package."""
        config = Settings()

        assert config.favorites_path == config.PROJECT_ROOT / "data" / "favorites.json"
        assert config.logging_config_path.name == "logging.yml"
        assert config.placeholder_image_path.exists()
