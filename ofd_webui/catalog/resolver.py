"""
Resolve loosely formatted URL names to the exact keys stored in a snapshot.

Names coming from URLs may differ from the stored directory names in case and
whitespace ("poly lite" vs "PolyLite"). Resolution walks the hierarchy one
level at a time and stops at the first level that has no match.
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Sequence

from ..errors import EntityNotFound

if TYPE_CHECKING:
    from .models import CatalogSnapshot

_WHITESPACE = re.compile(r"\s+")

LEVELS = ('brand', 'material', 'filament', 'variant')


def normalize(name: str) -> str:
    """Canonical comparison key: trimmed, lowercased, all whitespace removed."""
    return _WHITESPACE.sub('', name.strip().lower())


@dataclass(frozen=True)
class ResolvedChain:
    """Exact stored keys (and entities) for a resolved name chain."""
    brand_key: str
    material_key: Optional[str] = None
    filament_key: Optional[str] = None
    variant_key: Optional[str] = None
    brand: Any = None
    material: Any = None
    filament: Any = None
    variant: Any = None

    @property
    def keys(self) -> tuple:
        return tuple(k for k in (self.brand_key, self.material_key,
                                 self.filament_key, self.variant_key) if k is not None)


# Attribute holding the next level down
_CHILDREN = {
    'brand': 'materials',
    'material': 'filaments',
    'filament': 'variants',
}


def resolve_chain(snapshot: "CatalogSnapshot", names: Sequence[str]) -> ResolvedChain:
    """Resolve [brand, material?, filament?, variant?] against `snapshot`.

    Raises EntityNotFound naming the first level that could not be resolved.
    """
    if not names or len(names) > len(LEVELS):
        raise ValueError(f"Expected 1 to {len(LEVELS)} names, got {len(names)}")

    resolved = {}
    index = snapshot.brands
    for level, name in zip(LEVELS, names):
        key = index.find_key(name)
        if key is None:
            raise EntityNotFound(level, name)
        entity = index[key]
        resolved[f"{level}_key"] = key
        resolved[level] = entity
        if level in _CHILDREN:
            index = getattr(entity, _CHILDREN[level])

    return ResolvedChain(**resolved)
