"""
Persistent storage for the last seen index (the "snapshot").

This module manages the file:

    data/locations-of-interest.json

The snapshot is the baseline for the next run. It is always written as a
whole: the new content goes to a temporary file first and then replaces the
old file, so a crash never leaves a half-written snapshot behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from loiwatch.errors import SnapshotError
from loiwatch.model import Index, index_from_dict, index_to_dict

logger = logging.getLogger(__name__)


def load_snapshot(path: str | Path) -> Index:
    """
    Load the stored index.

    Returns an empty index if the file does not exist yet (first run).
    Raises SnapshotError if the file exists but is unreadable or malformed.
    """
    snapshot_path = Path(path)

    # First run: no snapshot yet -> everything on the page is new
    if not snapshot_path.exists():
        logger.info("No snapshot at %s, starting from an empty baseline", snapshot_path)
        return {}

    try:
        data = json.loads(snapshot_path.read_text(encoding="utf-8"))
        return index_from_dict(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, TypeError, ValueError) as exc:
        raise SnapshotError(f"Cannot read snapshot {snapshot_path}: {exc}") from exc


def save_snapshot(index: Index, path: str | Path) -> None:
    """
    Replace the stored snapshot with the given index.

    Creates parent directories if needed.
    """
    snapshot_path = Path(path)
    snapshot_path.parent.mkdir(parents=True, exist_ok=True)

    payload = json.dumps(index_to_dict(index), indent=2, ensure_ascii=False)

    fd, tmp_name = tempfile.mkstemp(dir=snapshot_path.parent, prefix=snapshot_path.name, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, snapshot_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Snapshot written to %s", snapshot_path)
