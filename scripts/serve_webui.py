#!/usr/bin/env python3
"""
Development server for the Open Filament Database WebUI.
Serves the editor for data/ and stores/ on port 8000 by default.

Usage:
    python scripts/serve_webui.py                       # data/ and stores/ next to this repo
    python scripts/serve_webui.py -d ../ofd/data -s ../ofd/stores
    python scripts/serve_webui.py -p 3000 --debug
    python scripts/serve_webui.py --config webui.yaml
"""

import argparse
import sys
from pathlib import Path

# Allow running from a checkout without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from ofd_webui import create_app
from ofd_webui.errors import ConfigError


def main():
    parser = argparse.ArgumentParser(
        description="Serve the Open Filament Database WebUI"
    )
    parser.add_argument(
        '-d', '--data-dir',
        help='Data directory (default: PUBLIC_DATA_PATH or ./data)'
    )
    parser.add_argument(
        '-s', '--stores-dir',
        help='Stores directory (default: PUBLIC_STORES_PATH or ./stores)'
    )
    parser.add_argument(
        '-c', '--config',
        help='YAML settings file (default: OFD_WEBUI_CONFIG)'
    )
    parser.add_argument(
        '-p', '--port',
        type=int,
        default=8000,
        help='Port to serve on (default: 8000)'
    )
    parser.add_argument(
        '--host',
        default='127.0.0.1',
        help='Host to bind to (default: 127.0.0.1)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable the Flask debugger and reloader'
    )

    args = parser.parse_args()

    try:
        app = create_app(
            config_path=Path(args.config) if args.config else None,
            data_root=args.data_dir,
            store_root=args.stores_dir,
            preload_catalog=True,
        )
    except ConfigError as e:
        print(f"Error: {e.message}")
        return 1

    settings = app.config['OFD_SETTINGS']
    if not settings.data_root.exists():
        print(f"Error: Data directory '{settings.data_root}' does not exist")
        return 1

    stats = app.extensions['ofd_catalog'].get().stats()
    print("=" * 60)
    print("Open Filament Database - WebUI Development Server")
    print("=" * 60)
    print(f"✓ Data directory:    {settings.data_root}")
    print(f"✓ Stores directory:  {settings.store_root}")
    print(f"✓ Server address:    http://{args.host}:{args.port}")
    print(f"✓ Catalog:           {stats['brands']} brands, {stats['filaments']} filaments, "
          f"{stats['stores']} stores")
    print("\nEndpoints:")
    print(f"  - Brands:     http://{args.host}:{args.port}/")
    print(f"  - Stores:     http://{args.host}:{args.port}/Store/")
    print(f"  - Delete API: DELETE http://{args.host}:{args.port}/api/delete")
    print("\nPress Ctrl+C to stop")
    print("=" * 60)

    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
