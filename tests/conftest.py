"""Shared pytest fixtures: a small on-disk database and an app bound to it."""

import json
from pathlib import Path

import pytest

from ofd_webui import create_app
from ofd_webui.config import Settings


def write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """data/ tree with two brands, one filament and one color variant.

    data/
      Acme/PLA/PolyLite/Galaxy Black/{variant,sizes}.json
      Acme/PETG/
      Prusament/
    """
    root = tmp_path / "data"
    write_json(root / "Acme" / "brand.json", {"name": "Acme", "website": "https://acme.example"})
    write_json(root / "Acme" / "PLA" / "material.json", {"material": "PLA"})
    write_json(root / "Acme" / "PLA" / "PolyLite" / "filament.json", {
        "name": "PolyLite",
        "density": 1.24,
        "diameter_tolerance": 0.02,
    })
    variant_dir = root / "Acme" / "PLA" / "PolyLite" / "Galaxy Black"
    write_json(variant_dir / "variant.json", {"name": "Galaxy Black", "color_hex": "#111111"})
    write_json(variant_dir / "sizes.json", [{"filament_weight": 1000, "diameter": 1.75}])
    write_json(root / "Acme" / "PETG" / "material.json", {"material": "PETG"})
    write_json(root / "Prusament" / "brand.json", {"name": "Prusament"})
    return root


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    root = tmp_path / "stores"
    write_json(root / "Printed Solid" / "store.json", {
        "name": "Printed Solid",
        "storefront_url": "https://www.printedsolid.com",
    })
    return root


@pytest.fixture
def settings(data_root: Path, store_root: Path) -> Settings:
    return Settings(data_root=data_root, store_root=store_root,
                    secret_key="test", log_level="WARNING")


@pytest.fixture
def app(settings: Settings):
    app = create_app(settings)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
