"""Accessors for per-app state: settings and the catalog cache."""

from flask import current_app

from .catalog import CatalogCache, CatalogSnapshot
from .config import Settings

CACHE_EXTENSION = 'ofd_catalog'
SETTINGS_KEY = 'OFD_SETTINGS'


def get_settings() -> Settings:
    return current_app.config[SETTINGS_KEY]


def get_cache() -> CatalogCache:
    return current_app.extensions[CACHE_EXTENSION]


def get_filament_database() -> CatalogSnapshot:
    """Latest committed catalog snapshot."""
    return get_cache().get()


def refresh_database() -> CatalogSnapshot:
    """Rebuild the snapshot after a write; returns once the new one is live."""
    return get_cache().refresh()
