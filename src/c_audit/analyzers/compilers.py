"""Compiler checkers — NDK reserved words and SAS/C, VBCC, DICE portability.

Each scan tokenises the sanitized line on whitespace and ``*();,``.
The NDK scan reports every reserved word it finds; the per-compiler
scans stop at the first incompatible keyword.
"""

from __future__ import annotations

from typing import Iterable

from c_audit.analyzers import LineContext, LineFinding
from c_audit.analyzers.tables import (
    NDK_RESERVED_WORDS,
    PREFIX_MARKER,
    SASC_INCOMPATIBLE,
    UNIVERSAL_REPLACEMENTS,
    VBCC_INCOMPATIBLE,
    tokens,
)
from c_audit.model import DiagnosticKind, ValidationMode
from c_audit.rules import (
    DICE_KEYWORD_001,
    NDK_RESERVED_WORD_001,
    SASC_KEYWORD_001,
    VBCC_KEYWORD_001,
)


def keyword_matches(token: str, keywords: Iterable[str]) -> bool:
    """Exact match, or prefix match for table entries ending in ``_``."""
    for kw in keywords:
        if token == kw:
            return True
        if kw.endswith(PREFIX_MARKER) and not kw.endswith("__") and token.startswith(kw):
            return True
    return False


def universal_replacement(keyword: str) -> str | None:
    """Universal macro for a compiler-specific keyword, if one exists."""
    return UNIVERSAL_REPLACEMENTS.get(keyword)


def incompatibility_message(keyword: str, compiler: str) -> str:
    replacement = universal_replacement(keyword)
    if replacement:
        return (
            f"Keyword '{keyword}' is {compiler}. "
            f"Use universal syntax '{replacement}' instead."
        )
    return f"Keyword '{keyword}' is {compiler} and has no direct universal equivalent."


class NDKChecker:
    """Reports NDK ``compiler-specific.h`` words that have universal forms."""

    id: str = "ndk"

    def enabled(self, modes) -> bool:
        return modes.is_on(ValidationMode.NDK)

    def check(self, ctx: LineContext) -> list[LineFinding]:
        return [
            LineFinding(
                DiagnosticKind.COMPILER,
                "NDK reserved word found - use universal syntax instead",
                NDK_RESERVED_WORD_001,
                with_excerpt=False,
            )
            for token in tokens(ctx.code)
            if token in NDK_RESERVED_WORDS
        ]


class _KeywordScan:
    """First keyword from ``keywords`` on the line, phrased for ``compiler``."""

    id: str
    mode: ValidationMode
    keywords: frozenset[str]
    phrase: str
    rule_id: str

    def enabled(self, modes) -> bool:
        return modes.is_on(self.mode)

    def check(self, ctx: LineContext) -> list[LineFinding]:
        for token in tokens(ctx.code):
            if keyword_matches(token, self.keywords):
                return [LineFinding(
                    DiagnosticKind.COMPILER,
                    incompatibility_message(token, self.phrase),
                    self.rule_id,
                    with_excerpt=False,
                )]
        return []


class SASCChecker(_KeywordScan):
    id = "sasc"
    mode = ValidationMode.SASC
    keywords = SASC_INCOMPATIBLE
    phrase = "incompatible with SAS/C"
    rule_id = SASC_KEYWORD_001


class VBCCChecker(_KeywordScan):
    id = "vbcc"
    mode = ValidationMode.VBCC
    keywords = VBCC_INCOMPATIBLE
    phrase = "incompatible with VBCC"
    rule_id = VBCC_KEYWORD_001


class DICEChecker(_KeywordScan):
    """DICE accepts C89 plus its own keywords; NDK reserved words are flagged."""

    id = "dice"
    mode = ValidationMode.DICE
    keywords = NDK_RESERVED_WORDS
    phrase = "DICE-incompatible"
    rule_id = DICE_KEYWORD_001
