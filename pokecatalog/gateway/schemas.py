"""ABOUTME: Pydantic schemas for the PokeAPI list, detail and type endpoints.
ABOUTME: Validates remote JSON at the boundary and exposes the immutable Entry record."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from pokecatalog.utils.formatting import id_from_url


class _Snapshot(BaseModel):
    """Immutable model that ignores fields the catalog does not use."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class NamedResource(_Snapshot):
    """A lightweight ``{name, url}`` reference to another resource."""

    name: str
    url: str

    @field_validator("url")
    @classmethod
    def _url_has_id(cls, value: str) -> str:
        id_from_url(value)
        return value

    @property
    def id(self) -> int:
        """Numeric id embedded as the last path segment of the url."""
        return id_from_url(self.url)


class ListPage(_Snapshot):
    """One page of the ``/pokemon`` list endpoint."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: tuple[NamedResource, ...] = ()

    @property
    def ids(self) -> list[int]:
        """Ids of the listed entries in list order."""
        return [item.id for item in self.results]


class TypeMember(_Snapshot):
    """Membership record inside a type resource."""

    pokemon: NamedResource
    slot: int = 1


class TypeMembership(_Snapshot):
    """The ``/type/{name}`` endpoint: every entry carrying the type."""

    id: int
    name: str
    pokemon: tuple[TypeMember, ...] = ()

    @property
    def member_ids(self) -> frozenset[int]:
        """Ids of all entries with this type."""
        return frozenset(member.pokemon.id for member in self.pokemon)

    @property
    def ordered_ids(self) -> list[int]:
        """Member ids in the order the source lists them."""
        return [member.pokemon.id for member in self.pokemon]


class TypeIndex(_Snapshot):
    """The ``/type`` endpoint listing every type name."""

    results: tuple[NamedResource, ...] = ()


class TypeSlot(_Snapshot):
    """A type tag of an entry."""

    slot: int
    type: NamedResource


class StatEntry(_Snapshot):
    """A base stat of an entry."""

    base_stat: int
    effort: int = 0
    stat: NamedResource


class AbilityEntry(_Snapshot):
    """An ability of an entry."""

    ability: NamedResource
    is_hidden: bool = False
    slot: int = 1


class _FrontSprite(_Snapshot):
    front_default: str | None = None


class _OtherSprites(_Snapshot):
    official_artwork: _FrontSprite = Field(default_factory=_FrontSprite, alias="official-artwork")
    home: _FrontSprite = Field(default_factory=_FrontSprite)


class Sprites(_Snapshot):
    """Artwork references of an entry, absent values are None."""

    front_default: str | None = None
    other: _OtherSprites = Field(default_factory=_OtherSprites)


class Entry(_Snapshot):
    """A single Pokemon as returned by the detail endpoint.

    Height is in decimetres and weight in hectograms, exactly as the source reports them.
    """

    id: PositiveInt
    name: str
    height: int = 0
    weight: int = 0
    base_experience: int | None = None
    types: tuple[TypeSlot, ...] = ()
    stats: tuple[StatEntry, ...] = ()
    abilities: tuple[AbilityEntry, ...] = ()
    sprites: Sprites = Field(default_factory=Sprites)

    @property
    def type_names(self) -> list[str]:
        """Type names ordered by slot."""
        return [slot.type.name for slot in sorted(self.types, key=lambda s: s.slot)]

    @property
    def stat_total(self) -> int:
        """Sum of all base stats."""
        return sum(stat.base_stat for stat in self.stats)

    def artwork_url(self, placeholder: str | Path) -> str:
        """Pick the best available artwork.

        Args:
            placeholder: Image used when the source provides no sprite at all.

        Returns:
            Official artwork, else the home render, else the default sprite, else the placeholder.
        """
        candidates = (
            self.sprites.other.official_artwork.front_default,
            self.sprites.other.home.front_default,
            self.sprites.front_default,
        )
        for url in candidates:
            if url:
                return url
        return str(placeholder)
