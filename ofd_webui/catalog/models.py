"""
Catalog snapshot data models.

A snapshot mirrors the data directory hierarchy:

    brands/{brand}/materials/{material}/filaments/{filament}/variants/{variant}

plus the flat list of stores. Each level is a NameIndex: an ordered, read-only
mapping of stored key -> entity with a secondary index from normalized key to
stored key. Snapshots are never mutated after they are built.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .resolver import normalize


class NameIndex(Mapping):
    """Read-only mapping of stored key -> entity with case/whitespace-insensitive lookup.

    The normalized index is built once. When two stored keys normalize to the
    same value the first one in enumeration order wins and the pair is
    recorded in `collisions`.
    """

    def __init__(self, items: Iterable[Tuple[str, Any]] = ()):
        self._items: Dict[str, Any] = {}
        self._index: Dict[str, str] = {}
        self.collisions: List[Tuple[str, str]] = []

        for key, value in items:
            self._items[key] = value
            norm = normalize(key)
            winner = self._index.setdefault(norm, key)
            if winner != key:
                self.collisions.append((winner, key))

    def __getitem__(self, key: str) -> Any:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"NameIndex({list(self._items)!r})"

    def find_key(self, name: str) -> Optional[str]:
        """Return the stored key matching `name` after normalization, or None."""
        return self._index.get(normalize(name))


@dataclass(frozen=True)
class Variant:
    """A color variant of a filament."""
    key: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    sizes: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def color_name(self) -> str:
        return self.attributes.get('name') or self.key


@dataclass(frozen=True)
class Filament:
    key: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    variants: NameIndex = field(default_factory=NameIndex)

    @property
    def name(self) -> str:
        return self.attributes.get('name') or self.key


@dataclass(frozen=True)
class Material:
    key: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    filaments: NameIndex = field(default_factory=NameIndex)


@dataclass(frozen=True)
class Brand:
    key: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    materials: NameIndex = field(default_factory=NameIndex)

    @property
    def name(self) -> str:
        return self.attributes.get('name') or self.key


@dataclass(frozen=True)
class Store:
    key: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.attributes.get('name') or self.key


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of the whole database at one point in time."""
    brands: NameIndex = field(default_factory=NameIndex)
    stores: NameIndex = field(default_factory=NameIndex)
    generation: int = 0

    def stats(self) -> Dict[str, int]:
        """Entity counts, for logging and the store index page."""
        materials = [m for b in self.brands.values() for m in b.materials.values()]
        filaments = [f for m in materials for f in m.filaments.values()]
        variants = sum(len(f.variants) for f in filaments)
        return {
            'brands': len(self.brands),
            'materials': len(materials),
            'filaments': len(filaments),
            'variants': variants,
            'stores': len(self.stores),
        }
