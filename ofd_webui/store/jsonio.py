"""JSON file helpers shared by the catalog loader and the store writer."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


def load_json(path: Path) -> Optional[Any]:
    """Load JSON from file, returning None (and logging) when it is unreadable."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Error loading %s: %s", path, e)
        return None


def save_json(path: Path, data: Any) -> None:
    """Save JSON with 2-space indent (matches project style).

    Writes to a sibling temp file first so readers never see a half-written file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    with open(tmp_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write('\n')
    os.replace(tmp_path, path)
