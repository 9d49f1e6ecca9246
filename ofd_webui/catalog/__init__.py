"""
Catalog snapshot: loading, caching and name resolution.
"""

from .cache import CatalogCache
from .loader import load_catalog
from .models import Brand, CatalogSnapshot, Filament, Material, NameIndex, Store, Variant
from .resolver import ResolvedChain, normalize, resolve_chain

__all__ = [
    'CatalogCache',
    'CatalogSnapshot',
    'NameIndex',
    'Brand',
    'Material',
    'Filament',
    'Variant',
    'Store',
    'ResolvedChain',
    'load_catalog',
    'normalize',
    'resolve_chain',
]
