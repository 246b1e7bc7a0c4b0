"""Shared utilities for c_audit."""

from c_audit.utils.determinism import (
    FIXED_TIMESTAMP,
    deterministic_run_id,
    deterministic_timestamp,
    is_ci_mode,
    normalize_path,
)

__all__ = [
    "FIXED_TIMESTAMP",
    "deterministic_run_id",
    "deterministic_timestamp",
    "is_ci_mode",
    "normalize_path",
]
