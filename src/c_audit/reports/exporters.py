"""Multi-format exporters for lint results.

Supports:

*  **text** — the classic console report, one diagnostic per line.
*  **JSON** — machine-readable, suitable for CI artifact storage.
*  **Markdown** — human-readable, suitable for PR comments.

All exporters accept a :class:`LintResult` and produce a string.
"""

from __future__ import annotations

from collections import Counter

from c_audit.core.config import ValidationModes
from c_audit.model import DiagnosticKind
from c_audit.model.diagnostic import Diagnostic
from c_audit.model.run_result import LintResult
from c_audit.utils.json_norm import stable_json_dumps

_KIND_ORDER = [
    DiagnosticKind.SYNTAX,
    DiagnosticKind.COMPILER,
    DiagnosticKind.WARNING,
    DiagnosticKind.STYLE,
    DiagnosticKind.COMMENT,
]


def _active_modes(result: LintResult) -> str:
    return ValidationModes.from_names(result.modes).describe()


# ════════════════════════════════════════════════════════════════════
# Text exporter
# ════════════════════════════════════════════════════════════════════


def format_diagnostic(d: Diagnostic) -> str:
    """``path:line:col: [KIND] message`` plus an indented excerpt line."""
    head = f"{d.path}:{d.line}:{d.column}: [{d.kind.label}] {d.message}"
    if d.excerpt:
        return f"{head}\n    | {d.excerpt}"
    return head


def export_text(result: LintResult, *, quiet: bool = False) -> str:
    """Export a ``LintResult`` as the console report.

    In quiet mode only the diagnostics themselves are printed.
    """
    lines: list[str] = []
    if not quiet:
        lines.append("Analysis complete.")
        lines.append(f"Active validation modes: {_active_modes(result)}")
        n = len(result.diagnostics)
        if n:
            lines.append(
                f"Found {n} issues in {result.files_processed} files "
                f"({result.lines_processed} lines processed)."
            )
            lines.append("")
            lines.append("--- Detailed Error Report ---")
        else:
            lines.append(
                f"No issues found in {result.files_processed} files "
                f"({result.lines_processed} lines processed)."
            )
    lines.extend(format_diagnostic(d) for d in result.diagnostics)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


# ════════════════════════════════════════════════════════════════════
# JSON exporter
# ════════════════════════════════════════════════════════════════════


def export_json(result: LintResult, *, indent: int = 2) -> str:
    """Export a ``LintResult`` as indented canonical JSON."""
    return stable_json_dumps(result.to_dict(), indent=indent)


# ════════════════════════════════════════════════════════════════════
# Markdown exporter
# ════════════════════════════════════════════════════════════════════


def export_markdown(result: LintResult, *, top_n: int = 50) -> str:
    """Export a ``LintResult`` as a concise Markdown summary."""
    lines: list[str] = []

    lines.append("# Lint Results")
    lines.append("")
    lines.append(f"**Modes:** {_active_modes(result)}  ")
    lines.append(f"**Files:** {result.files_processed}  ")
    lines.append(f"**Lines:** {result.lines_processed}  ")
    lines.append(f"**Diagnostics:** {len(result.diagnostics)}")
    lines.append("")

    kind_counts = Counter(d.kind for d in result.diagnostics)
    if kind_counts:
        lines.append("## By Kind")
        lines.append("")
        lines.append("| Kind | Count |")
        lines.append("|------|------:|")
        for kind in _KIND_ORDER:
            c = kind_counts.get(kind, 0)
            if c:
                lines.append(f"| {kind.label} | {c} |")
        lines.append("")

    top = result.diagnostics[:top_n]
    if top:
        lines.append(f"## First {len(top)} Diagnostics")
        lines.append("")
        for i, d in enumerate(top, 1):
            loc = f"{d.path}:{d.line}:{d.column}"
            lines.append(f"{i}. **[{d.kind.label}]** `{loc}` — {d.message}")
        lines.append("")

    if result.failed_files:
        lines.append("## Unreadable Files")
        lines.append("")
        for path in result.failed_files:
            lines.append(f"- `{path}`")
        lines.append("")

    lines.append("---")
    lines.append(f"*Exported by c-audit {result.tool_version}*")
    lines.append("")
    return "\n".join(lines)


def export_result(
    result: LintResult,
    fmt: str = "text",
    *,
    quiet: bool = False,
    top_n: int = 50,
) -> str:
    """Export a ``LintResult`` in the specified format.

    Parameters
    ----------
    result:
        The lint result to export.
    fmt:
        One of ``"text"``, ``"json"``, ``"markdown"``.
    quiet:
        Text format only: omit the summary lines.
    top_n:
        Number of diagnostics listed in markdown.

    Raises
    ------
    ValueError
        If *fmt* is not recognised.
    """
    if fmt == "text":
        return export_text(result, quiet=quiet)
    if fmt == "json":
        return export_json(result)
    if fmt in ("markdown", "md"):
        return export_markdown(result, top_n=top_n)
    raise ValueError(f"Unknown export format: {fmt!r} (use text|json|markdown)")
