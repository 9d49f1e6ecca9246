"""
Open Filament Database WebUI.

Flask application for editing the filament database stored under data/ and
stores/. Use create_app() to build an application instance.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from flask import Flask, jsonify, render_template, request

from .catalog import CatalogCache, load_catalog
from .config import Settings, configure_logging, load_settings
from .errors import CatalogError
from .routes import BLUEPRINTS
from .state import CACHE_EXTENSION, SETTINGS_KEY

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None,
               config_path: Optional[Path] = None,
               **overrides: Any) -> Flask:
    """Application factory.

    Settings come from `settings` when given, otherwise from the config file,
    environment and `overrides` (see ofd_webui.config).
    """
    if settings is None:
        settings = load_settings(config_path, **overrides)
    else:
        settings = settings.resolved()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config[SETTINGS_KEY] = settings

    def build_snapshot(generation: int):
        return load_catalog(settings.data_root, settings.store_root, generation)

    cache = CatalogCache(build_snapshot)
    app.extensions[CACHE_EXTENSION] = cache

    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    @app.errorhandler(CatalogError)
    def handle_catalog_error(error: CatalogError):
        if request.path.startswith('/api/'):
            return jsonify({'error': error.message}), error.status
        return render_template('error.html', status=error.status, message=error.message), error.status

    @app.after_request
    def add_no_cache_headers(resp):
        # Pages reflect the live catalog; never serve them from a cache
        resp.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        return resp

    @app.get('/')
    def index():
        return render_template('index.html', filament_data=cache.get())

    logger.info("Data directory:  %s", settings.data_root)
    logger.info("Stores directory: %s", settings.store_root)
    if settings.preload_catalog:
        cache.refresh()

    return app


__all__ = ['create_app', 'Settings', 'load_settings', '__version__']
