"""
Filesystem writes behind the filament and color variant form actions.

Entity directories are named after the entity's display name with characters
that cannot appear in a folder name stripped. Submitted fields are merged into
the existing JSON so fields the client left unset keep their stored value.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..catalog.resolver import normalize
from ..errors import BackendWriteFailure, DuplicateName
from .jsonio import load_json, save_json

logger = logging.getLogger(__name__)

ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

# Form fields that describe a size entry rather than the variant itself
SIZE_FIELDS = ('filament_weight', 'diameter')


def strip_illegal_chars(name: str) -> str:
    """Remove characters that are not allowed in a folder name."""
    return ILLEGAL_CHARS.sub('', name).strip()


def remove_unset(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop fields the client left unset so they don't overwrite stored values."""
    return {key: value for key, value in data.items() if value is not None}


def folder_name(name: str, level: str) -> str:
    """Directory name for an entity called `name`."""
    cleaned = strip_illegal_chars(name)
    if not cleaned or cleaned in ('.', '..'):
        raise BackendWriteFailure(f"Invalid {level} name: {name!r}")
    return cleaned


def find_sibling(parent: Path, name: str, exclude: Optional[str] = None) -> Optional[str]:
    """Return an existing child directory of `parent` whose name normalizes like `name`."""
    if not parent.is_dir():
        return None
    wanted = normalize(name)
    for child in sorted(parent.iterdir()):
        if child.is_dir() and child.name != exclude and normalize(child.name) == wanted:
            return child.name
    return None


def _load_object(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    data = load_json(path)
    return data if isinstance(data, dict) else {}


def _same_entry(a: Path, b: Path) -> bool:
    """True when `a` and `b` are the same directory entry (case-only renames)."""
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def _undo_rename(renamed_dir: Path, original_dir: Path) -> None:
    try:
        renamed_dir.rename(original_dir)
    except OSError:
        logger.exception("Could not restore filament %s from %s", original_dir, renamed_dir)
    else:
        logger.info("Restored filament %s after failed update", original_dir)


def update_filament(
    data_root: Path,
    brand: str,
    material: str,
    filament: str,
    fields: Dict[str, Any],
) -> str:
    """Merge `fields` into filament.json, renaming the folder when the name changes.

    Returns the (possibly new) filament directory name.
    """
    filament_dir = Path(data_root) / brand / material / filament
    if not filament_dir.is_dir():
        raise BackendWriteFailure(f"Filament directory not found: {filament_dir}")

    target_name = filament
    new_name = fields.get('name')
    if new_name and new_name != filament:
        target_name = folder_name(new_name, 'filament')
        existing = find_sibling(filament_dir.parent, target_name, exclude=filament)
        if existing:
            raise DuplicateName('filament', new_name, existing)

    target_dir = filament_dir.parent / target_name
    renamed = target_name != filament
    # Any entry at the target blocks the rename, not just a directory
    if renamed and os.path.lexists(target_dir) and not _same_entry(target_dir, filament_dir):
        raise BackendWriteFailure(f"Cannot rename filament: {target_dir} already exists")

    merged = {**_load_object(filament_dir / "filament.json"), **remove_unset(fields)}

    # Move directory first, then rewrite filament.json inside it
    if renamed:
        try:
            filament_dir.rename(target_dir)
        except OSError as e:
            raise BackendWriteFailure(f"Failed to rename filament {filament_dir}: {e}") from e
        logger.info("Renamed filament %s -> %s", filament_dir, target_name)

    try:
        save_json(target_dir / "filament.json", merged)
    except OSError as e:
        if renamed:
            _undo_rename(target_dir, filament_dir)
        raise BackendWriteFailure(f"Failed to update filament {target_dir}: {e}") from e

    logger.info("Updated filament %s/%s/%s", brand, material, target_name)
    return target_name


def _merge_sizes(sizes_file: Path, new_size: Optional[Dict[str, Any]]) -> Optional[List[Dict[str, Any]]]:
    """Return the sizes list to write, or None when sizes.json needs no change."""
    exists = sizes_file.exists()
    current = load_json(sizes_file) if exists else []
    if not isinstance(current, list):
        current = []

    if new_size is None:
        return None if exists else current
    if new_size in current:
        return None if exists else current
    return current + [new_size]


def create_color_files(
    data_root: Path,
    brand: str,
    material: str,
    filament: str,
    fields: Dict[str, Any],
) -> str:
    """Create or update a color variant folder (variant.json + sizes.json).

    Returns the variant directory name.
    """
    filament_dir = Path(data_root) / brand / material / filament
    if not filament_dir.is_dir():
        raise BackendWriteFailure(f"Filament directory not found: {filament_dir}")

    fields = remove_unset(fields)
    color_name = fields.pop('color_name', None)
    if not color_name:
        raise BackendWriteFailure("Color name is required")

    variant_name = folder_name(color_name, 'variant')
    existing = find_sibling(filament_dir, variant_name, exclude=variant_name)
    if existing:
        raise DuplicateName('variant', color_name, existing)

    new_size = None
    size_values = {key: fields.pop(key) for key in SIZE_FIELDS if key in fields}
    if len(size_values) == len(SIZE_FIELDS):
        new_size = size_values

    variant_dir = filament_dir / variant_name
    variant_file = variant_dir / "variant.json"
    sizes_file = variant_dir / "sizes.json"
    try:
        created = not variant_dir.exists()
        merged = {**_load_object(variant_file), 'name': color_name, **fields}
        save_json(variant_file, merged)
        sizes = _merge_sizes(sizes_file, new_size)
        if sizes is not None:
            save_json(sizes_file, sizes)
    except OSError as e:
        raise BackendWriteFailure(f"Failed to write color files in {variant_dir}: {e}") from e

    logger.info("%s variant %s/%s/%s/%s", "Created" if created else "Updated",
                brand, material, filament, variant_name)
    return variant_name
