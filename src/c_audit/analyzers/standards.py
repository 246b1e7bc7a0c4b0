"""Language-standard checkers — C89 conformance and C99 feature notices."""

from __future__ import annotations

from c_audit.analyzers import LineContext, LineFinding
from c_audit.analyzers.tables import (
    C89_FORBIDDEN_KEYWORDS,
    C99_HEADERS,
    C99_KEYWORDS,
    C99_STDLIB_FUNCTIONS,
    COMPOUND_LITERAL,
    DESIGNATED_INITIALIZER,
    FLEXIBLE_ARRAY_MEMBERS,
    FOR_LOOP_DECLARATION,
    VARIADIC_MACRO,
    call_pattern,
    word_pattern,
)
from c_audit.model import DiagnosticKind, ValidationMode
from c_audit.rules import (
    C89_C99_KEYWORD_001,
    C89_COMPOUND_LITERAL_001,
    C89_DESIGNATED_INIT_001,
    C89_FLEXIBLE_ARRAY_001,
    C89_FOR_DECL_001,
    C89_HEADER_001,
    C89_STDLIB_FUNC_001,
    C89_VARIADIC_MACRO_001,
    C99_COMPOUND_LITERAL_001,
    C99_DESIGNATED_INIT_001,
    C99_FEATURE_001,
    C99_FLEXIBLE_ARRAY_001,
    C99_HEADER_001,
    C99_KEYWORD_001,
    C99_STDLIB_FUNC_001,
    C99_VARIADIC_MACRO_001,
)

_C89_KEYWORD_PATTERNS = [
    (word_pattern([kw]), msg) for kw, msg in C89_FORBIDDEN_KEYWORDS.items()
]
_C99_KEYWORD_RE = word_pattern(C99_KEYWORDS)
_C99_STDLIB_RE = call_pattern(C99_STDLIB_FUNCTIONS)


def has_c99_stdlib_call(code: str) -> bool:
    return _C99_STDLIB_RE.search(code) is not None


def has_c99_header(text: str) -> bool:
    return any(h in text for h in C99_HEADERS)


def has_flexible_array(code: str) -> bool:
    return any(p in code for p in FLEXIBLE_ARRAY_MEMBERS)


def _feature_hits(ctx: LineContext) -> dict[str, bool]:
    """Which C99-only constructs appear on the line."""
    code = ctx.code
    return {
        "designated": DESIGNATED_INITIALIZER.search(code) is not None,
        "compound": COMPOUND_LITERAL.search(code) is not None,
        "variadic": VARIADIC_MACRO.search(code) is not None,
        "flexible": has_flexible_array(code),
        "stdlib": has_c99_stdlib_call(code),
        # header names live inside <...> which is not a literal
        "header": has_c99_header(ctx.text),
    }


class C89Checker:
    """Flags constructs that a strict C89 compiler rejects.

    Every matching construct on the line is reported.
    """

    id: str = "c89"

    def enabled(self, modes) -> bool:
        return modes.is_on(ValidationMode.C89)

    def check(self, ctx: LineContext) -> list[LineFinding]:
        findings: list[LineFinding] = []

        def syntax(message: str, rule_id: str) -> None:
            findings.append(
                LineFinding(DiagnosticKind.SYNTAX, message, rule_id, with_excerpt=False)
            )

        for pattern, message in _C89_KEYWORD_PATTERNS:
            if pattern.search(ctx.code):
                syntax(message, C89_C99_KEYWORD_001)

        if FOR_LOOP_DECLARATION.search(ctx.code):
            syntax("Variable declaration in for loop not allowed in C89", C89_FOR_DECL_001)

        hits = _feature_hits(ctx)
        if hits["designated"]:
            syntax("C99 designated initializer found - not available in C89",
                   C89_DESIGNATED_INIT_001)
        if hits["compound"]:
            syntax("C99 compound literal found - not available in C89",
                   C89_COMPOUND_LITERAL_001)
        if hits["variadic"]:
            syntax("C99 variadic macro found - not available in C89",
                   C89_VARIADIC_MACRO_001)
        if hits["flexible"]:
            syntax("C99 flexible array member found - not available in C89",
                   C89_FLEXIBLE_ARRAY_001)
        if hits["stdlib"]:
            syntax("C99+ standard library function found - not available in C89",
                   C89_STDLIB_FUNC_001)
        if hits["header"]:
            syntax("C99+ header file found - not available in C89", C89_HEADER_001)
        return findings


class C99Checker:
    """Notes C99 constructs so the target compiler can be double-checked."""

    id: str = "c99"

    def enabled(self, modes) -> bool:
        return modes.is_on(ValidationMode.C99)

    def check(self, ctx: LineContext) -> list[LineFinding]:
        findings: list[LineFinding] = []

        def note(what: str, rule_id: str) -> None:
            findings.append(LineFinding(
                DiagnosticKind.WARNING,
                f"{what} detected - ensure your compiler supports C99",
                rule_id,
            ))

        if _C99_KEYWORD_RE.search(ctx.code):
            note("C99 keyword", C99_KEYWORD_001)
        if FOR_LOOP_DECLARATION.search(ctx.code):
            note("C99 feature", C99_FEATURE_001)

        hits = _feature_hits(ctx)
        if hits["designated"]:
            note("C99 designated initializer", C99_DESIGNATED_INIT_001)
        if hits["compound"]:
            note("C99 compound literal", C99_COMPOUND_LITERAL_001)
        if hits["variadic"]:
            note("C99 variadic macro", C99_VARIADIC_MACRO_001)
        if hits["flexible"]:
            note("C99 flexible array member", C99_FLEXIBLE_ARRAY_001)
        if hits["stdlib"]:
            note("C99+ standard library function", C99_STDLIB_FUNC_001)
        if hits["header"]:
            note("C99+ header file", C99_HEADER_001)
        return findings
