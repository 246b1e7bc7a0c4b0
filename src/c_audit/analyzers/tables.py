"""Static rule tables shared by the line checkers.

Keyword and function tables are matched as whole identifiers; feature
patterns are regular expressions over sanitized code with literal
contents blanked.
"""

from __future__ import annotations

import re
from typing import Iterable

from c_audit.rules import AMI_C_TYPE_001, AMI_POINTER_TYPE_001, AMI_UNSIGNED_TYPE_001

# ── tokenisation ────────────────────────────────────────────────────

TOKEN_SEPARATORS = re.compile(r"[\s*();,]+")


def tokens(text: str) -> list[str]:
    """Split a line on whitespace and ``*();,`` like the keyword scans do."""
    return [t for t in TOKEN_SEPARATORS.split(text) if t]


def word_pattern(words: Iterable[str]) -> re.Pattern[str]:
    """Regex matching any of *words* as a whole identifier."""
    alternatives = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return re.compile(rf"(?<![A-Za-z0-9_])(?:{alternatives})(?![A-Za-z0-9_])")


def call_pattern(names: Iterable[str]) -> re.Pattern[str]:
    """Regex matching a call (identifier followed by ``(``) of any of *names*."""
    alternatives = "|".join(re.escape(n) for n in sorted(names, key=len, reverse=True))
    return re.compile(rf"(?<![A-Za-z0-9_.>])(?:{alternatives})\s*\(")


# ── language standards ──────────────────────────────────────────────

C99_KEYWORDS: tuple[str, ...] = (
    "inline", "restrict", "_Bool", "_Complex", "_Imaginary", "typeof",
)

# keyword → C89 message
C89_FORBIDDEN_KEYWORDS: dict[str, str] = {
    "inline": "'inline' keyword is not available in C89",
    "_Bool": "_Bool type is not available in C89",
    "restrict": "'restrict' keyword is not available in C89",
}

FOR_LOOP_DECLARATION = re.compile(
    r"\bfor\s*\(\s*"
    r"(?:(?:const|volatile|register|static|signed|unsigned)\s+)*"
    r"(?:int|char|long|short|float|double|signed|unsigned|struct\s+\w+)\b"
)

DESIGNATED_INITIALIZER = re.compile(
    r"[{,]\s*\.[A-Za-z_]\w*\s*="      # { .x = 1, .y = 2 }
    r"|[{,]\s*\[\s*\w+\s*\]\s*="      # { [3] = 7 }
)

COMPOUND_LITERAL = re.compile(
    r"\(\s*(?:struct|union|enum)\s+\w+\s*\)\s*\{"
    r"|\(\s*(?:(?:signed|unsigned)\s+)?"
    r"(?:int|char|long|short|float|double)\s*\[\s*\w*\s*\]\s*\)\s*\{"
)

VARIADIC_MACRO = re.compile(
    r"__VA_ARGS__|__VA_OPT__"
    r"|#\s*define\s+\w+\s*\([^)]*\.\.\.\s*\)"
)

FLEXIBLE_ARRAY_MEMBERS: tuple[str, ...] = (
    "char data[];", "int items[];", "long values[];", "float samples[];",
    "char name[];", "unsigned char buffer[];", "unsigned int flags[];",
    "short indices[];", "double measurements[];", "void *pointers[];",
)

C99_STDLIB_FUNCTIONS: tuple[str, ...] = (
    # <stdio.h> / <string.h> and bounds-checked variants
    "snprintf", "vsnprintf", "strdup", "strndup", "strnlen", "strlcpy", "strlcat",
    "asprintf", "vasprintf", "open_memstream", "fmemopen", "getline", "getdelim",
    "strtok_r", "strerror_r", "memset_s", "strcpy_s", "strcat_s", "strncpy_s",
    "strncat_s", "strlen_s", "strcmp_s", "strncmp_s", "strchr_s", "strrchr_s",
    "strstr_s", "strpbrk_s", "strspn_s", "strcspn_s", "strtok_s",
    # <math.h>
    "round", "lround", "llround", "trunc", "remainder", "fma", "nan",
    # <stdlib.h>
    "atoll", "strtof", "strtold", "llabs",
    # <inttypes.h>
    "strtoimax", "strtoumax",
)

C89_HEADERS: tuple[str, ...] = (
    "<stdio.h>", "<stdlib.h>", "<string.h>", "<ctype.h>", "<math.h>",
    "<time.h>", "<locale.h>", "<setjmp.h>", "<signal.h>", "<errno.h>",
    "<assert.h>", "<limits.h>", "<float.h>",
)

C99_HEADERS: tuple[str, ...] = (
    "<stdint.h>", "<stdbool.h>", "<complex.h>", "<tgmath.h>", "<fenv.h>",
    "<inttypes.h>", "<wchar.h>", "<wctype.h>", "<uchar.h>", "<threads.h>",
    "<stdatomic.h>", "<stdnoreturn.h>", "<stdalign.h>", "<stdbit.h>",
)

# ── Amiga ───────────────────────────────────────────────────────────

STDLIB_FUNCTIONS: frozenset[str] = frozenset({
    "printf", "scanf", "malloc", "free", "strcpy", "strlen", "fopen", "fclose", "fgets",
    "fputs", "fread", "fwrite", "fseek", "ftell", "rewind", "feof", "ferror", "clearerr",
    "strcat", "strcmp", "strncmp", "strncpy", "strncat", "strchr", "strrchr", "strstr",
    "strtok", "strerror", "strdup", "strndup", "strnlen", "strlcpy", "strlcat",
    "sprintf", "vsprintf", "snprintf", "vsnprintf", "sscanf", "fscanf",
    "calloc", "realloc", "memcpy", "memmove", "memcmp", "memset", "memchr",
    "abs", "labs", "llabs", "div", "ldiv", "lldiv", "rand", "srand",
    "atoi", "atol", "atoll", "strtol", "strtoul", "strtoll", "strtoull",
    "exit", "abort", "atexit", "system", "getenv", "setenv", "unsetenv",
    "time", "ctime", "gmtime", "localtime", "mktime", "strftime", "asctime",
    "isalpha", "isdigit", "isalnum", "isspace", "isupper", "islower", "toupper", "tolower",
    "sin", "cos", "tan", "asin", "acos", "atan", "atan2", "sinh", "cosh", "tanh",
    "exp", "log", "log10", "pow", "sqrt", "ceil", "floor", "fabs", "fmod",
    "setjmp", "longjmp", "signal", "raise", "qsort", "bsearch",
    "main",
})

AMIGA_FUNCTIONS: frozenset[str] = frozenset({
    "OpenLibrary", "CloseLibrary", "AllocMem", "FreeMem", "CreateMsgPort",
    "DeleteMsgPort", "DoIO", "OpenDevice", "CloseDevice", "ReadArgs",
    "Open", "Close", "Read", "Write",
})

# Words that open a line with "(" but never start a function definition.
CONTROL_KEYWORDS: frozenset[str] = frozenset({
    "if", "else", "for", "while", "do", "switch", "return", "case",
    "sizeof", "goto", "break", "continue", "default",
})

# (regex, DiagnosticKind name, rule id, message)
AMIGA_TYPE_RULES: tuple[tuple[re.Pattern[str], str, str, str], ...] = (
    (re.compile(r"\bchar\s*\*"), "WARNING", AMI_C_TYPE_001,
     "Use Amiga types (UBYTE* or STRPTR) instead of char*"),
    (re.compile(r"\blong[ \t]"), "WARNING", AMI_C_TYPE_001,
     "Use Amiga types (LONG) instead of long"),
    (re.compile(r"\bint[ \t]"), "WARNING", AMI_C_TYPE_001,
     "Use Amiga types (ULONG) instead of int"),
    (re.compile(r"\bshort[ \t]"), "WARNING", AMI_C_TYPE_001,
     "Use Amiga types (WORD) instead of short"),
    (re.compile(r"\bunsigned\s+(?:long|char|short|int)\b"), "STYLE", AMI_UNSIGNED_TYPE_001,
     "Use Amiga primitive types (ULONG, UBYTE, UWORD) instead of standard C types"),
    (re.compile(r"\bfloat[ \t]"), "WARNING", AMI_C_TYPE_001,
     "Use Amiga types (FLOAT) instead of float"),
    (re.compile(r"\bdouble[ \t]"), "WARNING", AMI_C_TYPE_001,
     "Use Amiga types (DOUBLE) instead of double"),
    (re.compile(r"\bbool[ \t]"), "WARNING", AMI_C_TYPE_001,
     "Use Amiga types (BOOL) instead of bool"),
    (re.compile(r"\bvoid\s*\*"), "WARNING", AMI_POINTER_TYPE_001,
     "Consider using Amiga types (APTR) instead of void* for untyped pointers"),
    (re.compile(r"\bconst\s+char\s*\*"), "WARNING", AMI_POINTER_TYPE_001,
     "Use Amiga types (CONST_STRPTR) instead of const char*"),
    (re.compile(r"\bunsigned\s+char\s*\*"), "WARNING", AMI_POINTER_TYPE_001,
     "Use Amiga types (STRPTR) instead of unsigned char* for strings"),
)

# deprecated / specialised exec types → message
AMIGA_DEPRECATED_TYPES: dict[str, str] = {
    "USHORT": "USHORT is deprecated - use UWORD instead",
    "SHORT": "SHORT is deprecated - use WORD instead",
    "COUNT": "COUNT is deprecated - use WORD instead",
    "UCOUNT": "UCOUNT is deprecated - use UWORD instead",
    "CPTR": "CPTR is deprecated - use ULONG instead",
}

AMIGA_BIT_TYPES: dict[str, str] = {
    "LONGBITS": "LONGBITS is for bit manipulation - consider if you really need this",
    "WORDBITS": "WORDBITS is for bit manipulation - consider if you really need this",
    "BYTEBITS": "BYTEBITS is for bit manipulation - consider if you really need this",
    "RPTR": "RPTR is for relative pointers - consider if you really need this",
}

POINTER_ZERO_ASSIGNMENT = re.compile(r"(?<![=!<>])=\s*0(?![\w.])")

# ── compilers ───────────────────────────────────────────────────────

NDK_RESERVED_WORDS: frozenset[str] = frozenset({
    "__saveds", "__save_ds", "__stkargs", "__amigainterrupt",
})

SASC_INCOMPATIBLE: frozenset[str] = frozenset({
    "__amigainterrupt", "__stkargs", "__attribute__", "__builtin_",
    "__volatile__", "__const__", "__restrict__",
})

VBCC_INCOMPATIBLE: frozenset[str] = frozenset({
    "__saveds", "__save_ds", "__stkargs", "__attribute__", "__builtin_",
    "__volatile__", "__const__", "__restrict__",
})

# Entries ending in "_" match any identifier with that prefix.
PREFIX_MARKER = "_"

# compiler-specific keyword → universal macro (None: no equivalent)
UNIVERSAL_REPLACEMENTS: dict[str, str | None] = {
    "__saveds": "__SAVE_DS__",
    "__save_ds": "__SAVE_DS__",
    "__asm": "__ASM__",
    "__reg": "__REG__",
    "__stdargs": "__STDARGS__",
    "__far": "__FAR__",
    "__interrupt": "__INTERRUPT__",
    "__amigainterrupt": "__INTERRUPT__",
    "__chip": "__CHIP__",
    "__fast": "__FAST__",
    "__stkargs": "__STDARGS__",
    "__attribute__": None,
    "__builtin_expect": None,
}

# ── memory safety ───────────────────────────────────────────────────

# unsafe function → suggested replacement
MEMSAFE_REPLACEMENTS: dict[str, str] = {
    # buffer overflow prone
    "strcpy": "strncpy",
    "strcat": "strncat",
    "sprintf": "snprintf",
    "gets": "fgets",
    "scanf": "check_return_and_width",
    "fscanf": "check_return_and_width",
    "sscanf": "check_return_and_width",
    "strtok": "strtok_r",
    "strerror": "strerror_r",
    "tmpnam": "tmpnam_r",
    "mktemp": "mkstemp",
    "realpath": "realpath",
    "vsprintf": "vsnprintf",
    # poor error reporting
    "atoi": "strtol",
    "atol": "strtol",
    "atof": "strtod",
    # not thread-safe
    "getenv": "getenv_s or use mutex protection",
}

# ── style ───────────────────────────────────────────────────────────

MAGIC_NUMBER_PRECEDERS = frozenset("+-*/%=(<>")
