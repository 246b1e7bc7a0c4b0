"""Expectation echo — surfaces ``$CODEX:`` annotations as comment diagnostics.

Test fixtures annotate a line with the diagnostic they expect::

    long value; /* $CODEX: Use Amiga types (LONG) instead of long */

The annotation text (up to the first ``/`` or ``*``) is recorded so a
fixture's output can be compared against its own expectations.
"""

from __future__ import annotations

from c_audit.analyzers import LineContext, LineFinding
from c_audit.model import DiagnosticKind
from c_audit.rules import ANN_EXPECTATION_ECHO_001

MARKER = "$CODEX:"


def extract_expectation(raw: str) -> str | None:
    """Annotation text on a raw line, or None if absent or empty."""
    pos = raw.find(MARKER)
    if pos < 0:
        return None
    rest = raw[pos + len(MARKER):].lstrip(" \t")
    end = len(rest)
    for stop in "/*":
        idx = rest.find(stop)
        if 0 <= idx < end:
            end = idx
    text = rest[:end].rstrip()
    return text or None


class ExpectationEchoChecker:
    id: str = "expectation_echo"

    def enabled(self, modes) -> bool:
        return True

    def check(self, ctx: LineContext) -> list[LineFinding]:
        text = extract_expectation(ctx.original)
        if text is None:
            return []
        return [LineFinding(
            DiagnosticKind.COMMENT, text, ANN_EXPECTATION_ECHO_001, with_excerpt=False,
        )]
