"""
c_audit.api
===========

Programmatic entrypoints for using c_audit as a library.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (ci_mode=True)
  - Stable, JSON-friendly outputs that match the bundled schema

Usage::

    from c_audit.api import lint_source, lint_paths

    report = lint_source("int main(void)\\n{\\n    return 0;\\n}\\n")
    result, result_dict = lint_paths(["src/"], ci_mode=True)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

from c_audit.core.config import LintConfig, resolve_modes
from c_audit.core.discover import discover_sources
from c_audit.core.runner import run_lint, split_source
from c_audit.core.session import FileReport, scan_lines
from c_audit.core.sink import DiagnosticSink
from c_audit.model.run_result import LintResult


# ── lint_source ─────────────────────────────────────────────────────


def lint_source(
    source: str | Sequence[str],
    *,
    path: str = "<source>",
    config: Optional[LintConfig] = None,
) -> FileReport:
    """Lint in-memory C source as a single file.

    Parameters
    ----------
    source:
        Whole file text, or a sequence of lines.
    path:
        Name reported in diagnostics.
    config:
        Lint configuration; modes are resolved as for a CLI run.

    Returns
    -------
    ``FileReport`` with this file's diagnostics and final scan state.
    """
    config = config or LintConfig()
    modes, _ = resolve_modes(config.modes)
    sink = DiagnosticSink(config.max_diagnostics)
    report = scan_lines(split_source(source), path, sink, config=config, modes=modes)
    # the overflow notice lives in the sink, not in the per-file list
    if sink.overflowed:
        return FileReport(
            path=report.path,
            lines=report.lines,
            diagnostics=sink.diagnostics,
            final_depth=report.final_depth,
            ended_in_comment=report.ended_in_comment,
            pairing=report.pairing,
        )
    return report


# ── lint_paths ──────────────────────────────────────────────────────


def lint_paths(
    paths: Sequence[str | Path],
    *,
    config: Optional[LintConfig] = None,
    ci_mode: bool = False,
) -> tuple[LintResult, dict[str, Any]]:
    """Lint files, directories and glob patterns.

    Returns
    -------
    ``(LintResult, lint_result_dict)``
        The dataclass and the schema-aligned JSON dict.
    """
    files = discover_sources(paths)
    result = run_lint(files, config, ci_mode=ci_mode)
    return result, result.to_dict()


# ── validate_instance ───────────────────────────────────────────────


def validate_instance(
    instance: dict[str, Any],
    schema_name: str,
) -> None:
    """Validate a Python dict against a named bundled schema.

    This is a library-friendly alternative to the CLI ``validate`` command.

    Raises
    ------
    jsonschema.ValidationError
        If validation fails.
    """
    from c_audit.contracts.load import validate_instance as _validate

    _validate(instance, schema_name)
