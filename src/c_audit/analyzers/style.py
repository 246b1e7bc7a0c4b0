"""Style checkers — magic numbers and over-long lines.

Both run in every mode.
"""

from __future__ import annotations

from c_audit.analyzers import LineContext, LineFinding
from c_audit.analyzers.tables import MAGIC_NUMBER_PRECEDERS
from c_audit.model import DiagnosticKind
from c_audit.rules import STY_LINE_LENGTH_001, STY_MAGIC_NUMBER_001


def find_magic_number(code: str) -> int:
    """Index of the first digit directly preceded by an operator or ``(``.

    Digits inside literals must already be blanked.  Returns -1 if none.
    """
    for i in range(1, len(code)):
        if code[i].isdigit() and code[i - 1] in MAGIC_NUMBER_PRECEDERS:
            return i
    return -1


class MagicNumberChecker:
    """One finding per line, at the first suspicious numeric constant."""

    id: str = "magic_numbers"

    def enabled(self, modes) -> bool:
        return True

    def check(self, ctx: LineContext) -> list[LineFinding]:
        pos = find_magic_number(ctx.code)
        if pos < 0:
            return []
        return [LineFinding(
            DiagnosticKind.STYLE,
            "Magic number found. Consider using a named constant.",
            STY_MAGIC_NUMBER_001,
            column=pos + 1,
        )]


class LineLengthChecker:
    id: str = "line_length"

    def enabled(self, modes) -> bool:
        return True

    def check(self, ctx: LineContext) -> list[LineFinding]:
        if len(ctx.original) <= ctx.line_length_limit:
            return []
        return [LineFinding(
            DiagnosticKind.STYLE,
            "Line exceeds maximum length.",
            STY_LINE_LENGTH_001,
            column=ctx.line_length_limit + 1,
        )]
