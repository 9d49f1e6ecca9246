"""
Build a CatalogSnapshot from the data/ and stores/ directory trees.

Walks the native hierarchy:

    data/{brand}/brand.json
    data/{brand}/{material}/material.json
    data/{brand}/{material}/{filament}/filament.json
    data/{brand}/{material}/{filament}/{variant}/variant.json + sizes.json
    stores/{store}/store.json
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List

from ..store.jsonio import load_json
from .models import Brand, CatalogSnapshot, Filament, Material, NameIndex, Store, Variant

logger = logging.getLogger(__name__)


def iter_entry_dirs(parent: Path) -> Iterator[Path]:
    """Yield child directories in sorted order, skipping hidden ones."""
    if not parent.is_dir():
        return
    for child in sorted(parent.iterdir()):
        if child.is_dir() and not child.name.startswith('.'):
            yield child


def load_attributes(path: Path) -> Dict[str, Any]:
    """Load an entity JSON file; missing or malformed files yield {}."""
    if not path.exists():
        return {}
    data = load_json(path)
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("Expected a JSON object in %s, ignoring", path)
        return {}
    return data


def load_sizes(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    data = load_json(path)
    if not isinstance(data, list):
        if data is not None:
            logger.warning("Expected a JSON array in %s, ignoring", path)
        return []
    return [item for item in data if isinstance(item, dict)]


def load_variant(variant_dir: Path) -> Variant:
    return Variant(
        key=variant_dir.name,
        attributes=load_attributes(variant_dir / "variant.json"),
        sizes=load_sizes(variant_dir / "sizes.json"),
    )


def load_filament(filament_dir: Path) -> Filament:
    return Filament(
        key=filament_dir.name,
        attributes=load_attributes(filament_dir / "filament.json"),
        variants=NameIndex((d.name, load_variant(d)) for d in iter_entry_dirs(filament_dir)),
    )


def load_material(material_dir: Path) -> Material:
    return Material(
        key=material_dir.name,
        attributes=load_attributes(material_dir / "material.json"),
        filaments=NameIndex((d.name, load_filament(d)) for d in iter_entry_dirs(material_dir)),
    )


def load_brand(brand_dir: Path) -> Brand:
    return Brand(
        key=brand_dir.name,
        attributes=load_attributes(brand_dir / "brand.json"),
        materials=NameIndex((d.name, load_material(d)) for d in iter_entry_dirs(brand_dir)),
    )


def load_catalog(data_dir: Path, stores_dir: Path, generation: int = 0) -> CatalogSnapshot:
    """Read the whole database into a new snapshot."""
    if not data_dir.is_dir():
        logger.warning("Data directory not found: %s", data_dir)
    if not stores_dir.is_dir():
        logger.warning("Stores directory not found: %s", stores_dir)

    brands = NameIndex((d.name, load_brand(d)) for d in iter_entry_dirs(data_dir))
    stores = NameIndex(
        (d.name, Store(key=d.name, attributes=load_attributes(d / "store.json")))
        for d in iter_entry_dirs(stores_dir)
    )

    for winner, loser in brands.collisions:
        logger.warning("Brand names %r and %r collide; %r wins lookups", winner, loser, winner)

    return CatalogSnapshot(brands=brands, stores=stores, generation=generation)
