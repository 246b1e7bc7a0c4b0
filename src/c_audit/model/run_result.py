"""LintResult — the schema-aligned artifact of one lint run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from c_audit import __version__
from c_audit.model import DiagnosticKind
from c_audit.model.diagnostic import Diagnostic
from c_audit.utils.determinism import deterministic_run_id, deterministic_timestamp

SCHEMA_VERSION = "lint_result_v1"


@dataclass(slots=True)
class LintResult:
    """Assembled lint result matching ``lint_result.schema.json``.

    Constructed by ``core.runner.run_lint`` once every file is processed.
    """

    # ── run metadata ────────────────────────────────────────────────
    run_id: str = field(default_factory=lambda: deterministic_run_id([]))
    created_at: str = field(default_factory=deterministic_timestamp)
    tool_version: str = __version__
    config: dict = field(default_factory=dict)
    modes: list[str] = field(default_factory=list)

    # ── totals ──────────────────────────────────────────────────────
    files_processed: int = 0
    lines_processed: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)
    overflowed: bool = False
    failed_files: list[str] = field(default_factory=list)

    @property
    def has_diagnostics(self) -> bool:
        return bool(self.diagnostics)

    def counts_by_kind(self) -> dict[str, int]:
        counts = {k.value: 0 for k in DiagnosticKind}
        for d in self.diagnostics:
            counts[d.kind.value] += 1
        return counts

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the full LintResult JSON matching the schema."""
        return {
            "schema_version": SCHEMA_VERSION,
            "run": {
                "run_id": self.run_id,
                "created_at": self.created_at,
                "tool_version": self.tool_version,
                "modes": list(self.modes),
                "config": self.config,
            },
            "summary": {
                "files_processed": self.files_processed,
                "lines_processed": self.lines_processed,
                "diagnostics_total": len(self.diagnostics),
                "by_kind": self.counts_by_kind(),
                "overflowed": self.overflowed,
            },
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "failed_files": list(self.failed_files),
        }
