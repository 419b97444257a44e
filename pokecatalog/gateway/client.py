"""ABOUTME: Async gateway to the PokeAPI REST service built on httpx.
ABOUTME: Adds per-request timeouts, external cancellation signals and typed error mapping."""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from types import TracebackType
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from pokecatalog.gateway.errors import CatalogError, MalformedResponseError, NotFoundError, TransportError
from pokecatalog.gateway.schemas import Entry, ListPage, TypeIndex, TypeMembership
from pokecatalog.settings import settings

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

HTTP_CLIENT_ERROR = 400
HTTP_SERVER_ERROR = 500


class PokeApiGateway:
    """Read-only client for the PokeAPI list, detail and type endpoints.

    Every operation accepts an optional ``signal``. Setting that event aborts the request in
    flight and raises ``asyncio.CancelledError`` so the caller can drop the result silently.
    A request that outlives ``timeout`` on its own is aborted as well, but reported as a
    ``TransportError``.

    Use as an async context manager when the gateway should own its ``httpx.AsyncClient``::

        async with PokeApiGateway() as gateway:
            entry = await gateway.fetch_by_id(25)
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url if base_url is not None else settings.API_BASE_URL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._should_close_client = client is None
        if client is None:
            client = httpx.AsyncClient(base_url=self.base_url, follow_redirects=True, timeout=self.timeout)
        self._client = client

    async def __aenter__(self) -> "PokeApiGateway":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this gateway created it."""
        if self._should_close_client:
            await self._client.aclose()

    async def _request(self, path: str, params: Mapping[str, Any] | None) -> Any:
        """Perform one GET and map transport and HTTP failures to catalog errors."""
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {path} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

        status = response.status_code
        if HTTP_CLIENT_ERROR <= status < HTTP_SERVER_ERROR:
            raise NotFoundError(f"HTTP {status}: {path}", status=status)
        if status >= HTTP_SERVER_ERROR:
            raise TransportError(f"HTTP {status}: {path}", status=status)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {path} is not valid JSON") from e

    async def _get_json(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        signal: asyncio.Event | None = None,
    ) -> Any:
        """Fetch JSON from ``path``, racing the request against the timeout and ``signal``.

        Raises:
            asyncio.CancelledError: If ``signal`` was set before the response arrived.
            TransportError: On network failure, server error or timeout.
            NotFoundError: On a 4xx response.
        """
        if signal is not None and signal.is_set():
            raise asyncio.CancelledError

        request = asyncio.ensure_future(self._request(path, params))
        waiters: set[asyncio.Future[Any]] = {request}
        cancel_waiter: asyncio.Future[Any] | None = None
        if signal is not None:
            cancel_waiter = asyncio.ensure_future(signal.wait())
            waiters.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(waiters, timeout=self.timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                if not waiter.done():
                    waiter.cancel()

        if cancel_waiter is not None and cancel_waiter in done:
            logger.debug("Request to %s cancelled", path)
            raise asyncio.CancelledError
        if request in done:
            return request.result()
        raise TransportError(f"Request to {path} timed out after {self.timeout:g}s")

    @staticmethod
    def _parse(model: type[ModelT], data: Any, path: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected response shape from {path}: {e.error_count()} errors") from e

    async def fetch_list(self, page_size: int, offset: int, signal: asyncio.Event | None = None) -> ListPage:
        """Fetch one window of the default ordered list.

        Args:
            page_size: Number of references to return.
            offset: Index of the first reference.
            signal: Optional cancellation signal.

        Returns:
            The list page with ``count`` and lightweight references.
        """
        data = await self._get_json("pokemon", params={"limit": page_size, "offset": offset}, signal=signal)
        return self._parse(ListPage, data, "pokemon")

    async def fetch_by_id(self, id_or_name: int | str, signal: asyncio.Event | None = None) -> Entry:
        """Fetch a full entry by numeric id or lowercase name.

        Raises:
            NotFoundError: If the source has no such entry.
            TransportError: If the source could not be reached.
        """
        path = f"pokemon/{quote(str(id_or_name), safe='')}"
        data = await self._get_json(path, signal=signal)
        return self._parse(Entry, data, path)

    async def fetch_by_type(self, type_name: str, signal: asyncio.Event | None = None) -> TypeMembership:
        """Fetch every entry reference carrying ``type_name``."""
        path = f"type/{quote(type_name, safe='')}"
        data = await self._get_json(path, signal=signal)
        return self._parse(TypeMembership, data, path)

    async def fetch_type_names(self, signal: asyncio.Event | None = None) -> list[str]:
        """Fetch the names of all types, in source order."""
        data = await self._get_json("type", signal=signal)
        return [item.name for item in self._parse(TypeIndex, data, "type").results]

    async def fetch_batch(self, ids: Iterable[int], signal: asyncio.Event | None = None) -> list[Entry]:
        """Fetch many entries concurrently, keeping only those that succeeded.

        Individual failures are dropped so that a single broken entry never hides the rest.

        Args:
            ids: Entry ids to fetch.
            signal: Optional cancellation signal shared by every request.

        Returns:
            Successfully fetched entries, in the order of ``ids``.

        Raises:
            asyncio.CancelledError: If ``signal`` was set while the batch was in flight.
        """
        id_list = list(ids)
        results = await asyncio.gather(
            *(self.fetch_by_id(entry_id, signal=signal) for entry_id in id_list),
            return_exceptions=True,
        )
        if signal is not None and signal.is_set():
            raise asyncio.CancelledError

        entries: list[Entry] = []
        for entry_id, result in zip(id_list, results, strict=True):
            if isinstance(result, Entry):
                entries.append(result)
            elif isinstance(result, CatalogError):
                logger.debug("Dropping entry %s from batch: %s", entry_id, result)
            elif isinstance(result, BaseException):
                raise result
        return entries

    async def resolve_search(self, query: str, signal: asyncio.Event | None = None) -> Entry | None:
        """Look up an entry by exact name or id.

        Args:
            query: Raw user input, trimmed and lowercased before the lookup.
            signal: Optional cancellation signal.

        Returns:
            The matching entry, or None when the query is blank or nothing matched.

        Raises:
            TransportError: If the source could not be reached.
        """
        term = query.strip().lower()
        if not term:
            return None
        try:
            return await self.fetch_by_id(term, signal=signal)
        except NotFoundError:
            logger.info("No entry matches search %r", term)
            return None
