from __future__ import annotations

import logging
from pathlib import Path

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


def ensure_storage_dir(storage_dir: str | Path) -> Path:
    """Create the attendance directory once at startup; fail fast if impossible."""
    path = Path(storage_dir)
    if path.is_dir():
        return path

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Cannot create attendance directory {path}: {e}") from e

    logger.info("Created attendance directory: %s", path)
    return path
