"""Tests for c_audit.analyzers — the per-line checkers in isolation."""

from __future__ import annotations

import pytest

from c_audit.analyzers import LineContext, default_checkers
from c_audit.analyzers.amiga import AmigaChecker, defined_function_name
from c_audit.analyzers.annotations import ExpectationEchoChecker, extract_expectation
from c_audit.analyzers.compilers import (
    DICEChecker,
    NDKChecker,
    SASCChecker,
    VBCCChecker,
    keyword_matches,
)
from c_audit.analyzers.memsafe import MemSafeChecker
from c_audit.analyzers.standards import C89Checker, C99Checker
from c_audit.analyzers.style import LineLengthChecker, MagicNumberChecker, find_magic_number
from c_audit.core.config import ValidationModes, resolve_modes
from c_audit.core.sanitize import blank_literals, sanitize_line
from c_audit.model import DiagnosticKind


def _ctx(raw: str, *modes: str, limit: int = 256) -> LineContext:
    text = sanitize_line(raw).text
    resolved, _ = resolve_modes(ValidationModes.from_names(modes))
    return LineContext(
        text=text,
        code=blank_literals(text),
        original=raw,
        line_number=1,
        path="t.c",
        modes=resolved,
        line_length_limit=limit,
    )


def _messages(checker, raw: str, *modes: str) -> list[str]:
    return [f.message for f in checker.check(_ctx(raw, *modes))]


# ── registry ────────────────────────────────────────────────────────


class TestDefaultCheckers:
    def test_order(self) -> None:
        assert [c.id for c in default_checkers()] == [
            "expectation_echo",
            "c89",
            "c99",
            "amiga",
            "ndk",
            "sasc",
            "vbcc",
            "dice",
            "memsafe",
            "magic_numbers",
            "line_length",
        ]

    def test_enabled_follows_modes(self) -> None:
        modes, _ = resolve_modes(ValidationModes(vbcc=True))
        enabled = {c.id for c in default_checkers() if c.enabled(modes)}
        assert enabled == {"expectation_echo", "c99", "vbcc", "magic_numbers", "line_length"}


# ── C89 / C99 ───────────────────────────────────────────────────────


class TestC89Checker:
    checker = C89Checker()

    @pytest.mark.parametrize(
        "raw, message",
        [
            ("for (int i = 0; i < n; i++)",
             "Variable declaration in for loop not allowed in C89"),
            ("struct point p = { .x = 1, .y = 2 };",
             "C99 designated initializer found - not available in C89"),
            ("int table[8] = { [3] = 7 };",
             "C99 designated initializer found - not available in C89"),
            ("p = (struct point){ 1, 2 };",
             "C99 compound literal found - not available in C89"),
            ("#define LOG(fmt, ...) printf(fmt, __VA_ARGS__)",
             "C99 variadic macro found - not available in C89"),
            ("    char data[];",
             "C99 flexible array member found - not available in C89"),
            ("n = snprintf(buf, sizeof buf, \"%d\", x);",
             "C99+ standard library function found - not available in C89"),
            ("#include <stdint.h>",
             "C99+ header file found - not available in C89"),
            ("char * restrict p;",
             "'restrict' keyword is not available in C89"),
        ],
    )
    def test_single_construct(self, raw: str, message: str) -> None:
        assert _messages(self.checker, raw) == [message]

    def test_findings_are_syntax_without_excerpt(self) -> None:
        (f,) = self.checker.check(_ctx("inline void f(void);"))
        assert f.kind is DiagnosticKind.SYNTAX
        assert f.with_excerpt is False

    @pytest.mark.parametrize(
        "raw",
        [
            'printf("inline restrict snprintf(");',
            "int inline_count;",
            "void log_all(const char *fmt, ...);",
            "for (i = 0; i < n; i++)",
            "#include <stdio.h>",
            "p = (char *)buf;",
        ],
    )
    def test_valid_c89_not_flagged(self, raw: str) -> None:
        assert _messages(self.checker, raw) == []

    def test_disabled_without_c89(self) -> None:
        modes, _ = resolve_modes(ValidationModes(c99=True))
        assert not self.checker.enabled(modes)


class TestC99Checker:
    checker = C99Checker()

    def test_keyword_warning(self) -> None:
        (f,) = self.checker.check(_ctx("inline int twice(int n);", "c99"))
        assert f.kind is DiagnosticKind.WARNING
        assert f.message == "C99 keyword detected - ensure your compiler supports C99"
        assert f.with_excerpt is True

    def test_for_loop_declaration(self) -> None:
        assert _messages(self.checker, "for (int i = 0; i < 3; i++) {", "c99") == [
            "C99 feature detected - ensure your compiler supports C99"
        ]

    def test_header(self) -> None:
        assert _messages(self.checker, "#include <stdbool.h>", "c99") == [
            "C99+ header file detected - ensure your compiler supports C99"
        ]


# ── Amiga ───────────────────────────────────────────────────────────


class TestAmigaChecker:
    checker = AmigaChecker()

    def test_char_pointer(self) -> None:
        assert _messages(self.checker, "char *name;", "amiga") == [
            "Use Amiga types (UBYTE* or STRPTR) instead of char*"
        ]

    def test_unsigned_long(self) -> None:
        findings = self.checker.check(_ctx("unsigned long flags;", "amiga"))
        assert [f.message for f in findings] == [
            "Use Amiga types (LONG) instead of long",
            "Use Amiga primitive types (ULONG, UBYTE, UWORD) instead of standard C types",
        ]
        assert findings[1].kind is DiagnosticKind.STYLE

    def test_void_pointer(self) -> None:
        assert _messages(self.checker, "void *p;", "amiga") == [
            "Consider using Amiga types (APTR) instead of void* for untyped pointers"
        ]

    def test_const_char_pointer(self) -> None:
        assert _messages(self.checker, "const char *s;", "amiga") == [
            "Use Amiga types (UBYTE* or STRPTR) instead of char*",
            "Use Amiga types (CONST_STRPTR) instead of const char*",
        ]

    def test_deprecated_type(self) -> None:
        assert _messages(self.checker, "USHORT count;", "amiga") == [
            "USHORT is deprecated - use UWORD instead"
        ]

    def test_bit_type(self) -> None:
        assert _messages(self.checker, "LONGBITS mask;", "amiga") == [
            "LONGBITS is for bit manipulation - consider if you really need this"
        ]

    def test_lowercase_function_name(self) -> None:
        assert _messages(self.checker, "ULONG do_work(ULONG n)", "amiga") == [
            "Use PascalCase function names"
        ]

    def test_pascalcase_and_known_names_accepted(self) -> None:
        assert _messages(self.checker, "ULONG DoWork(ULONG n)", "amiga") == []
        assert _messages(self.checker, "LONG main(LONG argc)", "amiga") == []

    def test_null_pointer_assignment(self) -> None:
        (f,) = self.checker.check(_ctx("struct Node *node = 0;", "amiga"))
        assert f.kind is DiagnosticKind.STYLE
        assert f.message == "Assigning 0 to a pointer. Use the Amiga constant NULL instead."

    def test_pointer_comparison_not_assignment(self) -> None:
        assert _messages(self.checker, "if (*p == 0)", "amiga") == []

    def test_types_inside_strings_ignored(self) -> None:
        assert _messages(self.checker, 'puts("char *long int");', "amiga") == []

    @pytest.mark.parametrize(
        "code, name",
        [
            ("ULONG do_work(ULONG n)", "do_work"),
            ("static struct Task *find_task(void)", "find_task"),
            ("if (ready(x))", None),
            ("return compute(x);", None),
            ("x = 1;", None),
        ],
    )
    def test_defined_function_name(self, code: str, name: str | None) -> None:
        assert defined_function_name(code) == name


# ── compilers ───────────────────────────────────────────────────────


class TestCompilerCheckers:
    def test_ndk_reports_every_word(self) -> None:
        findings = NDKChecker().check(_ctx("LONG __saveds __stkargs Handler(void)", "ndk"))
        assert len(findings) == 2
        assert all(f.kind is DiagnosticKind.COMPILER for f in findings)
        assert findings[0].message == "NDK reserved word found - use universal syntax instead"

    def test_sasc_without_equivalent(self) -> None:
        assert _messages(SASCChecker(), "int x __attribute__((packed));", "sasc") == [
            "Keyword '__attribute__' is incompatible with SAS/C and has no direct "
            "universal equivalent."
        ]

    def test_sasc_with_replacement(self) -> None:
        assert _messages(SASCChecker(), "LONG __stkargs Entry(void);", "sasc") == [
            "Keyword '__stkargs' is incompatible with SAS/C. "
            "Use universal syntax '__STDARGS__' instead."
        ]

    def test_vbcc_prefix_entry(self) -> None:
        assert _messages(VBCCChecker(), "if (__builtin_expect(x, 0))", "vbcc") == [
            "Keyword '__builtin_expect' is incompatible with VBCC and has no direct "
            "universal equivalent."
        ]

    def test_vbcc_reports_first_only(self) -> None:
        assert _messages(VBCCChecker(), "LONG __saveds __stkargs F(void);", "vbcc") == [
            "Keyword '__saveds' is incompatible with VBCC. "
            "Use universal syntax '__SAVE_DS__' instead."
        ]

    def test_dice(self) -> None:
        assert _messages(DICEChecker(), "void __save_ds Server(void);", "dice") == [
            "Keyword '__save_ds' is DICE-incompatible. "
            "Use universal syntax '__SAVE_DS__' instead."
        ]

    @pytest.mark.parametrize(
        "token, expected",
        [
            ("__builtin_memcpy", True),
            ("__attribute__", True),
            ("__volatile__x", False),
            ("attribute", False),
        ],
    )
    def test_keyword_matches(self, token: str, expected: bool) -> None:
        table = {"__builtin_", "__attribute__", "__volatile__"}
        assert keyword_matches(token, table) is expected


# ── memory safety ───────────────────────────────────────────────────


class TestMemSafeChecker:
    checker = MemSafeChecker()

    def test_replacement_suggested(self) -> None:
        (f,) = self.checker.check(_ctx("strcpy(dst, src);", "memsafe"))
        assert f.kind is DiagnosticKind.WARNING
        assert f.message == "Memory-unsafe function 'strcpy' found - consider using 'strncpy' instead"

    def test_scanf_guidance(self) -> None:
        assert _messages(self.checker, 'scanf("%s", buf);', "memsafe") == [
            "Unsafe use of 'scanf' suspected. Ensure format string uses width "
            "specifiers (e.g., '%10s') and check the return value."
        ]

    def test_realpath_guidance(self) -> None:
        assert _messages(self.checker, "realpath(p, NULL);", "memsafe") == [
            "Unsafe use of 'realpath' suspected. Ensure the second argument "
            "is a valid buffer, not NULL."
        ]

    def test_first_only(self) -> None:
        assert _messages(self.checker, "gets(buf); strcat(a, b);", "memsafe") == [
            "Memory-unsafe function 'gets' found - consider using 'fgets' instead"
        ]

    def test_names_in_strings_ignored(self) -> None:
        assert _messages(self.checker, 'puts("strcpy");', "memsafe") == []


# ── style ───────────────────────────────────────────────────────────


class TestStyleCheckers:
    @pytest.mark.parametrize(
        "code, index",
        [
            ("x=5;", 2),
            ("x = 5;", -1),
            ("f(10);", 2),
            ("a[3] = b;", -1),
            ("y = x-1;", 6),
            ("7;", -1),
        ],
    )
    def test_find_magic_number(self, code: str, index: int) -> None:
        assert find_magic_number(code) == index

    def test_magic_number_column(self) -> None:
        (f,) = MagicNumberChecker().check(_ctx("delay(50);"))
        assert f.kind is DiagnosticKind.STYLE
        assert f.message == "Magic number found. Consider using a named constant."
        assert f.column == 7

    def test_digits_in_strings_ignored(self) -> None:
        assert MagicNumberChecker().check(_ctx('puts("x=5");')) == []

    def test_line_length_boundary(self) -> None:
        checker = LineLengthChecker()
        assert checker.check(_ctx("x" * 10, limit=10)) == []
        (f,) = checker.check(_ctx("x" * 11, limit=10))
        assert f.message == "Line exceeds maximum length."
        assert f.column == 11


# ── annotations ─────────────────────────────────────────────────────


class TestExpectationEcho:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("x; /* $CODEX: Expect this */", "Expect this"),
            ("x; /* $CODEX: a*b */", "a"),
            ("x; /* $CODEX:    */", None),
            ("x; /* plain */", None),
        ],
    )
    def test_extract(self, raw: str, expected: str | None) -> None:
        assert extract_expectation(raw) == expected

    def test_finding_is_comment(self) -> None:
        (f,) = ExpectationEchoChecker().check(_ctx("long v; /* $CODEX: Wanted */"))
        assert f.kind is DiagnosticKind.COMMENT
        assert f.message == "Wanted"
        assert f.with_excerpt is False
