"""ABOUTME: Orchestrates the remote fetches behind the list and detail views.
ABOUTME: Caches per request key, cancels superseded loads and rejects stale results."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pokecatalog.catalog.composer import (
    Branch,
    compose_results,
    is_search_not_found,
    resolve_candidates,
    select_branch,
    total_pages,
)
from pokecatalog.catalog.favorites import FavoritesStore
from pokecatalog.catalog.fetch_cache import FetchCache
from pokecatalog.catalog.filter_state import FilterState
from pokecatalog.gateway.errors import CatalogError
from pokecatalog.gateway.schemas import Entry, ListPage, TypeMembership
from pokecatalog.settings import settings

logger = logging.getLogger(__name__)


class Gateway(Protocol):
    """The remote operations the controller relies on (see PokeApiGateway)."""

    async def fetch_list(self, page_size: int, offset: int, signal: asyncio.Event | None = None) -> ListPage: ...

    async def fetch_by_id(self, id_or_name: int | str, signal: asyncio.Event | None = None) -> Entry: ...

    async def fetch_by_type(self, type_name: str, signal: asyncio.Event | None = None) -> TypeMembership: ...

    async def fetch_type_names(self, signal: asyncio.Event | None = None) -> list[str]: ...

    async def fetch_batch(self, ids: list[int], signal: asyncio.Event | None = None) -> list[Entry]: ...

    async def resolve_search(self, query: str, signal: asyncio.Event | None = None) -> Entry | None: ...


@dataclass(frozen=True)
class CatalogView:
    """Everything the list view renders for one filter state.

    Attributes:
        filters: Filter state the view was built for.
        entries: Entries of the current page.
        total_items: Number of entries across all client-side pages.
        total_pages: ceil(total_items / page size).
        remote_total: Size of the full default list (default list branch only).
        search_not_found: The search completed without a usable match.
        excluded_by_type: The search matched an entry that lacks the selected type.
        error: Failure to surface with a retry action, None on success.
        retry_kind: Cache kind to invalidate before retrying after ``error``.
        page_size: Entries per page.
    """

    filters: FilterState
    entries: tuple[Entry, ...] = ()
    total_items: int = 0
    total_pages: int = 0
    remote_total: int | None = None
    search_not_found: bool = False
    excluded_by_type: bool = False
    error: CatalogError | None = None
    retry_kind: str | None = None
    page_size: int = settings.PAGE_SIZE

    @property
    def navigable_pages(self) -> int:
        """Pages the pagination control offers, including server-side list pages."""
        if self.remote_total is None:
            return self.total_pages
        return max(self.total_pages, total_pages(self.remote_total, self.page_size))


class CatalogController:
    """Builds CatalogViews, one load at a time.

    A new ``load`` supersedes the previous one: its cancellation signal is set, its
    requests are aborted and it returns None without touching ``view`` or the cache.
    Results are published by generation, never by arrival order.
    """

    def __init__(
        self,
        favorites: FavoritesStore,
        page_size: int | None = None,
        cache: FetchCache | None = None,
    ) -> None:
        self.favorites = favorites
        self.page_size = page_size if page_size is not None else settings.PAGE_SIZE
        self.cache = cache if cache is not None else FetchCache()
        self.view: CatalogView | None = None
        self._generation = 0
        self._signal: asyncio.Event | None = None

    def cancel(self) -> None:
        """Cancel the load in flight, if any."""
        if self._signal is not None:
            self._signal.set()

    async def load(self, gateway: Gateway, filters: FilterState) -> CatalogView | None:
        """Build the view for ``filters`` and publish it as ``self.view``.

        Args:
            gateway: Remote gateway to fetch through.
            filters: Filter state to build the view for.

        Returns:
            The new view, or None if a later load superseded this one.
        """
        self.cancel()
        signal = asyncio.Event()
        self._signal = signal
        self._generation += 1
        generation = self._generation

        try:
            view = await self._build_view(gateway, filters, signal)
        except asyncio.CancelledError:
            if signal.is_set():
                logger.debug("Load for %s superseded", filters)
                return None
            raise

        if generation != self._generation:
            logger.debug("Discarding stale result for %s", filters)
            return None
        self.view = view
        return view

    async def _build_view(self, gateway: Gateway, filters: FilterState, signal: asyncio.Event) -> CatalogView:
        branch = select_branch(filters)
        favorites = self.favorites.ids
        try:
            search_result, search_completed, type_membership, list_page = await self._fetch_inputs(
                gateway, filters, branch, signal
            )
        except CatalogError as e:
            logger.warning("Failed to load catalog inputs for %s: %s", filters, e)
            return CatalogView(filters=filters, error=e, retry_kind=self._input_kind(branch))

        type_member_ids = type_membership.ordered_ids if type_membership is not None else None
        candidates = resolve_candidates(
            filters,
            favorites,
            search_result=search_result,
            type_member_ids=type_member_ids,
            list_ids=list_page.ids if list_page is not None else None,
        )

        entries: list[Entry] = []
        if candidates.ids:
            try:
                entries = await self.cache.get_or_fetch(
                    ("batch", candidates.ids),
                    lambda: gateway.fetch_batch(list(candidates.ids), signal=signal),
                )
            except CatalogError as e:
                logger.warning("Failed to load entry details for %s: %s", filters, e)
                return CatalogView(filters=filters, error=e, retry_kind="batch")

        composed = compose_results(entries, filters, favorites, self.page_size, branch=branch)
        member_set = type_membership.member_ids if type_membership is not None else None
        return CatalogView(
            filters=filters,
            entries=composed.entries,
            total_items=composed.total_items,
            total_pages=composed.total_pages,
            remote_total=list_page.count if list_page is not None else None,
            search_not_found=is_search_not_found(filters, search_completed, search_result, member_set),
            excluded_by_type=candidates.excluded_by_type,
            page_size=self.page_size,
        )

    async def _fetch_inputs(
        self,
        gateway: Gateway,
        filters: FilterState,
        branch: Branch,
        signal: asyncio.Event,
    ) -> tuple[Entry | None, bool, TypeMembership | None, ListPage | None]:
        """Fetch search, type and list inputs the branch needs, concurrently."""
        if branch is Branch.FAVORITES:
            return None, False, None, None

        searching = bool(filters.query)
        term = filters.query.strip().lower()

        async def search() -> Entry | None:
            if not searching:
                return None
            return await self.cache.get_or_fetch(
                ("search", term), lambda: gateway.resolve_search(filters.query, signal=signal)
            )

        async def by_type() -> TypeMembership | None:
            if not filters.type_name:
                return None
            return await self.cache.get_or_fetch(
                ("type", filters.type_name), lambda: gateway.fetch_by_type(filters.type_name, signal=signal)
            )

        async def default_list() -> ListPage | None:
            if branch is not Branch.DEFAULT_LIST:
                return None
            offset = (filters.page - 1) * self.page_size
            return await self.cache.get_or_fetch(
                ("list", self.page_size, offset),
                lambda: gateway.fetch_list(self.page_size, offset, signal=signal),
            )

        tasks = [asyncio.ensure_future(fetch) for fetch in (search(), by_type(), default_list())]
        try:
            search_result, type_membership, list_page = await asyncio.gather(*tasks)
        except CatalogError:
            # A failed input aborts the ones still in flight
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return search_result, searching, type_membership, list_page

    @staticmethod
    def _input_kind(branch: Branch) -> str | None:
        return {
            Branch.SEARCH_IN_TYPE: None,
            Branch.SEARCH: "search",
            Branch.TYPE: "type",
            Branch.DEFAULT_LIST: "list",
        }.get(branch)

    def retry(self, kind: str | None) -> None:
        """Forget cached results of ``kind`` (everything if None) so the next load refetches."""
        self.cache.invalidate(kind)

    async def load_entry(self, gateway: Gateway, id_or_name: int | str) -> Entry:
        """Fetch one entry for the detail view.

        Raises:
            NotFoundError: If the entry does not exist.
            TransportError: If the source could not be reached.
        """
        key = str(id_or_name).strip().lower()
        return await self.cache.get_or_fetch(("entry", key), lambda: gateway.fetch_by_id(key))

    async def load_type_names(self, gateway: Gateway) -> list[str]:
        """Fetch the type names for the type selector, cached for the session."""
        return await self.cache.get_or_fetch(("types",), gateway.fetch_type_names)
