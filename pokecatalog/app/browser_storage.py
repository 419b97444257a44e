# ABOUTME: Browser localStorage persistence for the favorites list.
# ABOUTME: Backs the FavoritesStore with a single JSON array under one storage key.

import json
import logging
from typing import Any

from streamlit_local_storage import LocalStorage

from pokecatalog.gateway.errors import PersistenceError
from pokecatalog.settings import settings

logger = logging.getLogger(__name__)


class BrowserFavoritesBackend:
    """FavoritesBackend that reads and writes browser localStorage.

    The LocalStorage component snapshots the browser's items when it is created, so a new
    component is created for every read and write to see what the browser delivered on
    the current rerun. Outside a Streamlit session with the component loaded, reads and
    writes raise PersistenceError, which the store swallows.
    """

    def __init__(self, storage_key: str | None = None) -> None:
        self.storage_key = storage_key if storage_key is not None else settings.FAVORITES_STORAGE_KEY

    def read(self) -> Any:
        """Return the raw stored favorites value, None if nothing is stored."""
        try:
            storage = LocalStorage()
            return storage.getItem(self.storage_key)
        except Exception as e:
            # LocalStorage unavailable (no Streamlit runtime, JS disabled, etc.)
            raise PersistenceError(f"Could not read {self.storage_key} from localStorage") from e

    def write(self, ids: list[int]) -> None:
        """Store ``ids`` as a JSON array."""
        try:
            storage = LocalStorage()
            storage.setItem(self.storage_key, json.dumps(ids), key=f"set_{self.storage_key}")
        except Exception as e:
            raise PersistenceError(f"Could not write {self.storage_key} to localStorage") from e
        logger.debug("Saved %d favorites to localStorage", len(ids))
