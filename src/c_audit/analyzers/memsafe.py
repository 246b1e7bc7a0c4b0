"""Memory-safety checker — unbounded or thread-unsafe library calls."""

from __future__ import annotations

from c_audit.analyzers import LineContext, LineFinding
from c_audit.analyzers.tables import MEMSAFE_REPLACEMENTS, tokens
from c_audit.model import DiagnosticKind, ValidationMode
from c_audit.rules import MEM_UNSAFE_FUNC_001


def unsafe_call_message(name: str) -> str:
    """Guidance for one unsafe function; format-string readers get specifics."""
    if name == "realpath":
        return (
            "Unsafe use of 'realpath' suspected. Ensure the second argument "
            "is a valid buffer, not NULL."
        )
    if name in ("scanf", "sscanf"):
        return (
            f"Unsafe use of '{name}' suspected. Ensure format string uses width "
            "specifiers (e.g., '%10s') and check the return value."
        )
    return (
        f"Memory-unsafe function '{name}' found - consider using "
        f"'{MEMSAFE_REPLACEMENTS[name]}' instead"
    )


class MemSafeChecker:
    """Reports the first memory-unsafe function named on the line."""

    id: str = "memsafe"

    def enabled(self, modes) -> bool:
        return modes.is_on(ValidationMode.MEMSAFE)

    def check(self, ctx: LineContext) -> list[LineFinding]:
        for token in tokens(ctx.code):
            if token in MEMSAFE_REPLACEMENTS:
                return [LineFinding(
                    DiagnosticKind.WARNING,
                    unsafe_call_message(token),
                    MEM_UNSAFE_FUNC_001,
                    with_excerpt=False,
                )]
        return []
