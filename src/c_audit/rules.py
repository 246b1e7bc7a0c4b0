"""Canonical rule ID registry.

Single source of truth for all rule IDs emitted by c-audit.

PUBLIC_RULE_IDS is stable, supported and safe for downstream consumption.
"""

from __future__ import annotations

# ── Lexical / session (public) ──────────────────────────────────────
LEX_UNTERMINATED_COMMENT_001 = "LEX_UNTERMINATED_COMMENT_001"
SYS_DIAGNOSTIC_OVERFLOW_001 = "SYS_DIAGNOSTIC_OVERFLOW_001"
ANN_EXPECTATION_ECHO_001 = "ANN_EXPECTATION_ECHO_001"

# ── C89 (public) ────────────────────────────────────────────────────
C89_LINE_COMMENT_001 = "C89_LINE_COMMENT_001"
C89_DECL_AFTER_STMT_001 = "C89_DECL_AFTER_STMT_001"
C89_C99_KEYWORD_001 = "C89_C99_KEYWORD_001"
C89_FOR_DECL_001 = "C89_FOR_DECL_001"
C89_DESIGNATED_INIT_001 = "C89_DESIGNATED_INIT_001"
C89_COMPOUND_LITERAL_001 = "C89_COMPOUND_LITERAL_001"
C89_VARIADIC_MACRO_001 = "C89_VARIADIC_MACRO_001"
C89_FLEXIBLE_ARRAY_001 = "C89_FLEXIBLE_ARRAY_001"
C89_STDLIB_FUNC_001 = "C89_STDLIB_FUNC_001"
C89_HEADER_001 = "C89_HEADER_001"

# ── C99 (public) ────────────────────────────────────────────────────
C99_KEYWORD_001 = "C99_KEYWORD_001"
C99_FEATURE_001 = "C99_FEATURE_001"
C99_DESIGNATED_INIT_001 = "C99_DESIGNATED_INIT_001"
C99_COMPOUND_LITERAL_001 = "C99_COMPOUND_LITERAL_001"
C99_VARIADIC_MACRO_001 = "C99_VARIADIC_MACRO_001"
C99_FLEXIBLE_ARRAY_001 = "C99_FLEXIBLE_ARRAY_001"
C99_STDLIB_FUNC_001 = "C99_STDLIB_FUNC_001"
C99_HEADER_001 = "C99_HEADER_001"

# ── Amiga (public) ──────────────────────────────────────────────────
AMI_C_TYPE_001 = "AMI_C_TYPE_001"
AMI_UNSIGNED_TYPE_001 = "AMI_UNSIGNED_TYPE_001"
AMI_DEPRECATED_TYPE_001 = "AMI_DEPRECATED_TYPE_001"
AMI_BIT_TYPE_001 = "AMI_BIT_TYPE_001"
AMI_POINTER_TYPE_001 = "AMI_POINTER_TYPE_001"
AMI_PASCALCASE_001 = "AMI_PASCALCASE_001"
AMI_NULL_POINTER_001 = "AMI_NULL_POINTER_001"

# ── Compiler compatibility (public) ─────────────────────────────────
NDK_RESERVED_WORD_001 = "NDK_RESERVED_WORD_001"
SASC_KEYWORD_001 = "SASC_KEYWORD_001"
VBCC_KEYWORD_001 = "VBCC_KEYWORD_001"
DICE_KEYWORD_001 = "DICE_KEYWORD_001"

# ── Memory safety (public) ──────────────────────────────────────────
MEM_UNSAFE_FUNC_001 = "MEM_UNSAFE_FUNC_001"

# ── Style (public) ──────────────────────────────────────────────────
STY_MAGIC_NUMBER_001 = "STY_MAGIC_NUMBER_001"
STY_LINE_LENGTH_001 = "STY_LINE_LENGTH_001"

# ── Critical section pairing (public) ───────────────────────────────
PAIR_USAGE_001 = "PAIR_USAGE_001"
PAIR_NESTED_ENTER_001 = "PAIR_NESTED_ENTER_001"
PAIR_UNMATCHED_LEAVE_001 = "PAIR_UNMATCHED_LEAVE_001"
PAIR_DISTANCE_001 = "PAIR_DISTANCE_001"
PAIR_NO_LEAVE_001 = "PAIR_NO_LEAVE_001"
PAIR_COUNT_MISMATCH_001 = "PAIR_COUNT_MISMATCH_001"
PAIR_OPEN_AT_EOF_001 = "PAIR_OPEN_AT_EOF_001"

# ── Buckets ─────────────────────────────────────────────────────────

PUBLIC_RULE_IDS: list[str] = sorted([
    # Lexical / session
    LEX_UNTERMINATED_COMMENT_001,
    SYS_DIAGNOSTIC_OVERFLOW_001,
    ANN_EXPECTATION_ECHO_001,
    # C89
    C89_LINE_COMMENT_001,
    C89_DECL_AFTER_STMT_001,
    C89_C99_KEYWORD_001,
    C89_FOR_DECL_001,
    C89_DESIGNATED_INIT_001,
    C89_COMPOUND_LITERAL_001,
    C89_VARIADIC_MACRO_001,
    C89_FLEXIBLE_ARRAY_001,
    C89_STDLIB_FUNC_001,
    C89_HEADER_001,
    # C99
    C99_KEYWORD_001,
    C99_FEATURE_001,
    C99_DESIGNATED_INIT_001,
    C99_COMPOUND_LITERAL_001,
    C99_VARIADIC_MACRO_001,
    C99_FLEXIBLE_ARRAY_001,
    C99_STDLIB_FUNC_001,
    C99_HEADER_001,
    # Amiga
    AMI_C_TYPE_001,
    AMI_UNSIGNED_TYPE_001,
    AMI_DEPRECATED_TYPE_001,
    AMI_BIT_TYPE_001,
    AMI_POINTER_TYPE_001,
    AMI_PASCALCASE_001,
    AMI_NULL_POINTER_001,
    # Compiler compatibility
    NDK_RESERVED_WORD_001,
    SASC_KEYWORD_001,
    VBCC_KEYWORD_001,
    DICE_KEYWORD_001,
    # Memory safety
    MEM_UNSAFE_FUNC_001,
    # Style
    STY_MAGIC_NUMBER_001,
    STY_LINE_LENGTH_001,
    # Pairing
    PAIR_USAGE_001,
    PAIR_NESTED_ENTER_001,
    PAIR_UNMATCHED_LEAVE_001,
    PAIR_DISTANCE_001,
    PAIR_NO_LEAVE_001,
    PAIR_COUNT_MISMATCH_001,
    PAIR_OPEN_AT_EOF_001,
])


def _assert_rule_registry_invariants() -> None:
    """Fail fast on invariant violations.

    Called at import time so CI and local runs catch issues immediately.
    """
    import re

    # Prefix may carry digits (C89_, C99_); suffix is always three digits.
    rule_re = re.compile(r"^[A-Z][A-Z0-9]{1,4}_[A-Z][A-Z0-9_]*_[0-9]{3}$")

    def _check_bucket(name: str, ids: list[str]) -> None:
        if ids != sorted(ids):
            raise AssertionError(f"{name} must be sorted")
        if len(ids) != len(set(ids)):
            raise AssertionError(f"{name} must contain unique IDs")
        bad = [x for x in ids if not rule_re.match(x)]
        if bad:
            raise AssertionError(f"{name} contains invalid rule IDs: {bad}")

    _check_bucket("PUBLIC_RULE_IDS", PUBLIC_RULE_IDS)


_assert_rule_registry_invariants()
