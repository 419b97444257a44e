"""ABOUTME: Configuration logic and path settings for the project.
ABOUTME: Provides the PokeAPI endpoint, request limits, paging and storage locations."""

from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pokecatalog import __version__


def _get_project_root() -> Path:
    """Find project root by looking for pyproject.toml."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Contains settings for this project.

    Every field can be overridden with a ``POKECATALOG_`` prefixed environment variable,
    e.g. ``POKECATALOG_REQUEST_TIMEOUT=5``.
    """

    model_config = SettingsConfigDict(env_prefix="POKECATALOG_")

    VERSION: str = __version__
    """Project version."""

    PROJECT_ROOT: Path = _get_project_root()
    """Root directory of the project."""

    API_BASE_URL: str = "https://pokeapi.co/api/v2"
    """Base URL of the PokeAPI REST service."""

    REQUEST_TIMEOUT: float = 10.0
    """Seconds before a single remote request is aborted."""

    PAGE_SIZE: int = 20
    """Number of entries shown per page."""

    SEARCH_DEBOUNCE_SECONDS: float = 0.8
    """How long search input must be stable before it is committed to the filters."""

    FAVORITES_STORAGE_KEY: str = "pokemon-favorites"
    """Browser localStorage key holding the JSON array of favorite ids."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def data_dir(self) -> Path:
        """Base data directory."""
        return self.PROJECT_ROOT / "data"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def favorites_path(self) -> Path:
        """JSON file holding favorites for the command line interface."""
        return self.data_dir / "favorites.json"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def configs_dir(self) -> Path:
        """Directory containing configuration files."""
        return self.PROJECT_ROOT / "configs"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def logging_config_path(self) -> Path:
        """Path to the logging.yml configuration file."""
        return self.configs_dir / "logging.yml"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def placeholder_image_path(self) -> Path:
        """Local artwork used when an entry has no sprite at all."""
        return Path(__file__).resolve().parent / "assets" / "placeholder.svg"


settings = Settings()
