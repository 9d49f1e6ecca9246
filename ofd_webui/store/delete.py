"""Recursive removal of catalog entries."""

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def delete_tree(path: Path) -> bool:
    """Remove `path` and everything beneath it.

    Returns False when there is nothing at `path`. Errors part way through
    propagate and may leave a partially deleted subtree behind.
    """
    if not os.path.lexists(path):
        return False

    logger.info("Attempting deletion of path %s", path)
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.unlink(path)
    return True
