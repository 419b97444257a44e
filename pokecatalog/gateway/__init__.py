"""ABOUTME: Gateway package for the remote PokeAPI data source.
ABOUTME: Exposes the async client, endpoint schemas and the error taxonomy."""

from pokecatalog.gateway.client import PokeApiGateway
from pokecatalog.gateway.errors import (
    CatalogError,
    MalformedResponseError,
    NotFoundError,
    PersistenceError,
    TransportError,
)
from pokecatalog.gateway.schemas import (
    Entry,
    ListPage,
    NamedResource,
    TypeMembership,
)

__all__ = [
    "CatalogError",
    "Entry",
    "ListPage",
    "MalformedResponseError",
    "NamedResource",
    "NotFoundError",
    "PersistenceError",
    "PokeApiGateway",
    "TransportError",
    "TypeMembership",
]
