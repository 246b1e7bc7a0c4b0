"""Amiga checker — exec type usage, naming and NULL conventions."""

from __future__ import annotations

import re

from c_audit.analyzers import LineContext, LineFinding
from c_audit.analyzers.tables import (
    AMIGA_BIT_TYPES,
    AMIGA_DEPRECATED_TYPES,
    AMIGA_FUNCTIONS,
    AMIGA_TYPE_RULES,
    CONTROL_KEYWORDS,
    POINTER_ZERO_ASSIGNMENT,
    STDLIB_FUNCTIONS,
    word_pattern,
)
from c_audit.model import DiagnosticKind, ValidationMode
from c_audit.rules import (
    AMI_BIT_TYPE_001,
    AMI_DEPRECATED_TYPE_001,
    AMI_NULL_POINTER_001,
    AMI_PASCALCASE_001,
)

# <type tokens> <name> (   at the start of a line
_FUNCTION_HEAD = re.compile(
    r"^\s*(?P<lead>[A-Za-z_]\w*)(?:[\s*]+[A-Za-z_]\w*)*?[\s*]+(?P<name>[A-Za-z_]\w*)\s*\("
)

_DEPRECATED = [(word_pattern([w]), msg) for w, msg in AMIGA_DEPRECATED_TYPES.items()]
_BIT_TYPES = [(word_pattern([w]), msg) for w, msg in AMIGA_BIT_TYPES.items()]


def defined_function_name(code: str) -> str | None:
    """Name of the function a line appears to declare or define, if any."""
    m = _FUNCTION_HEAD.match(code)
    if m is None or m.group("lead") in CONTROL_KEYWORDS:
        return None
    return m.group("name")


class AmigaChecker:
    """Suggests exec types over raw C types and PascalCase function names."""

    id: str = "amiga"

    def enabled(self, modes) -> bool:
        return modes.is_on(ValidationMode.AMIGA)

    def check(self, ctx: LineContext) -> list[LineFinding]:
        code = ctx.code
        findings: list[LineFinding] = []

        for pattern, kind, rule_id, message in AMIGA_TYPE_RULES:
            if pattern.search(code):
                findings.append(LineFinding(DiagnosticKind[kind], message, rule_id))

        for pattern, message in _DEPRECATED:
            if pattern.search(code):
                findings.append(
                    LineFinding(DiagnosticKind.WARNING, message, AMI_DEPRECATED_TYPE_001)
                )
        for pattern, message in _BIT_TYPES:
            if pattern.search(code):
                findings.append(
                    LineFinding(DiagnosticKind.WARNING, message, AMI_BIT_TYPE_001)
                )

        name = defined_function_name(code)
        if (
            name
            and name[0].islower()
            and name not in STDLIB_FUNCTIONS
            and name not in AMIGA_FUNCTIONS
        ):
            findings.append(LineFinding(
                DiagnosticKind.WARNING, "Use PascalCase function names", AMI_PASCALCASE_001,
            ))

        if "*" in code and POINTER_ZERO_ASSIGNMENT.search(code):
            findings.append(LineFinding(
                DiagnosticKind.STYLE,
                "Assigning 0 to a pointer. Use the Amiga constant NULL instead.",
                AMI_NULL_POINTER_001,
            ))
        return findings
