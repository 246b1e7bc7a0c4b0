"""Determinism utilities for CI-reproducible output.

When --ci mode is enabled:
- Timestamps are fixed to a known epoch
- Run IDs are derived from the analysed paths
- Paths are normalized to POSIX form

This keeps JSON output identical across machines and runs.
"""

from __future__ import annotations

import hashlib
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

# Fixed timestamp for CI mode (ISO 8601 with timezone)
FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"


def is_ci_mode(explicit: bool = False) -> bool:
    """True if *explicit* is set or ``CI_MODE`` / ``DETERMINISTIC`` is truthy."""
    if explicit:
        return True
    for var in ("CI_MODE", "DETERMINISTIC"):
        if os.environ.get(var, "").lower() in ("1", "true", "yes"):
            return True
    return False


def deterministic_timestamp(ci_mode: bool = False) -> str:
    """FIXED_TIMESTAMP in CI mode, otherwise the current UTC time."""
    if is_ci_mode(ci_mode):
        return FIXED_TIMESTAMP
    return datetime.now(timezone.utc).isoformat()


def deterministic_run_id(paths: Iterable[str], ci_mode: bool = False) -> str:
    """Generate a run ID.

    In CI mode the ID is a hash of the analysed paths, so the same
    invocation always yields the same ID.
    """
    if is_ci_mode(ci_mode):
        content = "\n".join(sorted(paths)).encode("utf-8")
        return f"ci-{hashlib.sha256(content).hexdigest()[:16]}"
    return f"run-{uuid.uuid4().hex[:16]}"


def normalize_path(path: Path, root: Path | None = None) -> str:
    """POSIX form of *path*, relative to *root* when it lies beneath it."""
    if root is not None:
        try:
            return path.resolve().relative_to(root.resolve()).as_posix()
        except ValueError:
            # Not under root, keep as given
            return path.as_posix()
    return path.as_posix()
