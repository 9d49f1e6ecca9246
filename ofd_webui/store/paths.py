"""
Delete targets and the path guard.

A delete target names an entity by kind, name and ancestor names. The guard
turns it into an absolute path and refuses anything that does not land
strictly beneath the data root or the store root.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from ..errors import InvalidKind, MissingAncestor, PathEscape

KINDS = ('brand', 'store', 'material', 'filament', 'instance')

# kind -> (ancestor attributes in hierarchy order, error message when any is missing)
REQUIRED_ANCESTORS = {
    'brand': ((), ''),
    'store': ((), ''),
    'material': (('brand_name',),
                 'Brand name is required for material deletion'),
    'filament': (('brand_name', 'material_name'),
                 'Brand name and material name are required for filament deletion'),
    'instance': (('brand_name', 'material_name', 'filament_name'),
                 'Brand name, material name, and filament name are required for instance deletion'),
}


@dataclass(frozen=True)
class DeleteTarget:
    kind: str
    name: Optional[str] = None
    brand_name: Optional[str] = None
    material_name: Optional[str] = None
    filament_name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DeleteTarget":
        """Build a target from the camelCase JSON body of DELETE /api/delete."""
        def text(key: str) -> Optional[str]:
            value = payload.get(key)
            return value if isinstance(value, str) else None

        return cls(
            kind=text('type') or '',
            name=text('name'),
            brand_name=text('brandName'),
            material_name=text('materialName'),
            filament_name=text('filamentName'),
        )


def is_single_component(segment: str) -> bool:
    """True when `segment` names one directory entry (no separators, not . or ..)."""
    if segment in ('.', '..') or '\x00' in segment:
        return False
    return not any(sep in segment for sep in ('/', '\\', os.sep))


def lexical_path(path: Path) -> Path:
    """Absolute path with '..' collapsed textually, symlinks untouched."""
    return Path(os.path.normpath(os.path.abspath(path)))


def canonical(path: Path) -> Path:
    """Absolute path with '..' and symlinks resolved (missing tails allowed)."""
    return Path(os.path.realpath(path))


def is_within(path: Path, root: Path) -> bool:
    """True when `path` is strictly beneath `root` (both canonical)."""
    root_str = str(root)
    if not root_str.endswith(os.sep):
        root_str += os.sep
    return str(path).startswith(root_str)


def resolve_delete_path(target: DeleteTarget, data_root: Path, store_root: Path) -> Path:
    """Compute the on-disk path for `target`, enforcing containment in the roots.

    Raises InvalidKind, MissingAncestor or PathEscape.
    """
    if target.kind not in REQUIRED_ANCESTORS:
        raise InvalidKind(target.kind)

    ancestors, message = REQUIRED_ANCESTORS[target.kind]
    segments = [getattr(target, attr) for attr in ancestors]
    if not all(segments):
        raise MissingAncestor(message)
    if not target.name:
        raise MissingAncestor("Name is required")

    root = store_root if target.kind == 'store' else data_root
    composed = Path(root).joinpath(*segments, target.name)
    if not all(is_single_component(s) for s in (*segments, target.name)):
        raise PathEscape(str(composed))

    # Both the lexical path (what gets deleted) and the canonical path (what it
    # really points at) must stay inside the same root.
    lexical = lexical_path(composed)
    resolved = canonical(composed)
    for allowed in (data_root, store_root):
        if is_within(lexical, lexical_path(allowed)) and is_within(resolved, canonical(allowed)):
            return lexical
    raise PathEscape(str(composed))
