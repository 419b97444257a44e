"""ABOUTME: Favorites store: a durable set of entry ids with idempotent add and remove.
ABOUTME: Persists through a pluggable backend and never lets storage failures reach the caller."""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from pokecatalog.gateway.errors import PersistenceError

logger = logging.getLogger(__name__)


def parse_favorites(raw: Any) -> set[int]:
    """Parse a persisted favorites value into a set of ids.

    Handles a JSON string, an already decoded list, None and malformed data. Items that
    are not positive integers are discarded.

    Args:
        raw: Value read from storage.

    Returns:
        The favorite ids, empty if the value is missing or malformed.
    """
    if raw is None:
        return set()

    data: Any = raw
    if isinstance(data, str | bytes):
        try:
            data = json.loads(data)
        except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
            return set()

    if not isinstance(data, list):
        return set()

    return {item for item in data if isinstance(item, int) and not isinstance(item, bool) and item > 0}


class FavoritesBackend(Protocol):
    """Durable storage for the favorites list."""

    def read(self) -> Any:
        """Return the raw persisted value, None if nothing was stored."""
        ...

    def write(self, ids: list[int]) -> None:
        """Replace the persisted value with ``ids``."""
        ...


class MemoryFavoritesBackend:
    """Backend that keeps the serialized list in memory."""

    def __init__(self, raw: Any = None) -> None:
        self.raw = raw

    def read(self) -> Any:
        return self.raw

    def write(self, ids: list[int]) -> None:
        self.raw = json.dumps(ids)


class FileFavoritesBackend:
    """Backend storing the favorites as a JSON array in a file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> Any:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Could not read favorites from {self.path}") from e

    def write(self, ids: list[int]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(ids), encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Could not write favorites to {self.path}") from e


class FavoritesStore:
    """The set of favorited entry ids.

    Callers hold an explicit handle to the store; ``load`` must be called once before use.
    The in-memory set is authoritative for the session, so a failed write only gets logged.
    """

    def __init__(self, backend: FavoritesBackend) -> None:
        self.backend = backend
        self._ids: set[int] = set()

    def load(self) -> frozenset[int]:
        """Read the persisted favorites, falling back to an empty set on any failure."""
        try:
            raw = self.backend.read()
        except Exception:
            logger.warning("Could not read favorites, starting with an empty set", exc_info=True)
            raw = None
        self._ids = parse_favorites(raw)
        return self.ids

    @property
    def ids(self) -> frozenset[int]:
        """Current favorite ids."""
        return frozenset(self._ids)

    def contains(self, entry_id: int) -> bool:
        """Whether ``entry_id`` is a favorite."""
        return entry_id in self._ids

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, entry_id: int) -> frozenset[int]:
        """Mark ``entry_id`` as favorite; adding an existing favorite changes nothing.

        Returns:
            The favorites after the change.
        """
        self._ids.add(entry_id)
        self._persist()
        return self.ids

    def remove(self, entry_id: int) -> frozenset[int]:
        """Unmark ``entry_id``; removing a non-favorite changes nothing.

        Returns:
            The favorites after the change.
        """
        self._ids.discard(entry_id)
        self._persist()
        return self.ids

    def toggle(self, entry_id: int) -> bool:
        """Flip the favorite state of ``entry_id``.

        Returns:
            True if the entry is a favorite afterwards.
        """
        if entry_id in self._ids:
            self.remove(entry_id)
            return False
        self.add(entry_id)
        return True

    def _persist(self) -> None:
        try:
            self.backend.write(sorted(self._ids))
        except Exception:
            logger.warning("Could not persist favorites", exc_info=True)
