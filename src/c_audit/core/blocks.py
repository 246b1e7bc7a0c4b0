"""Block tracker — brace depth and the C89 declaration-placement rule.

C89 requires every declaration in a block to precede the block's first
statement.  The tracker keeps one ``statement_seen`` flag per open brace
depth and classifies each sanitized line *before* the line's own braces
are applied.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from c_audit.core.sanitize import first_non_blank
from c_audit.model import DiagnosticKind
from c_audit.model.diagnostic import Diagnostic
from c_audit.rules import C89_DECL_AFTER_STMT_001

# Number of depth slots, file scope included; deeper opens are not tracked.
MAX_BLOCK_DEPTH = 32

DECLARATION_KEYWORDS: frozenset[str] = frozenset({
    "auto", "char", "const", "double", "enum", "extern", "float", "int",
    "long", "register", "short", "signed", "static", "struct", "typedef",
    "union", "unsigned", "void", "volatile",
})

LABEL_KEYWORDS: frozenset[str] = frozenset({"case", "default"})

DECL_AFTER_STATEMENT_MESSAGE = (
    "Variable declaration after a statement is not allowed in C89."
)

Emit = Callable[[Diagnostic], bool]


class LineClass(str, Enum):
    """How the declaration-placement rule sees a sanitized line."""

    EMPTY = "empty"
    DECLARATION = "declaration"        # simple declaration: ';' before any '('
    COMPLEX = "complex"                # prototype, function pointer, ...
    LABEL = "label"                    # case/default or closing brace
    STATEMENT = "statement"


def classify_line(text: str) -> LineClass:
    """Classify a sanitized line for the declaration-placement rule."""
    trimmed = text.strip()
    if not trimmed:
        return LineClass.EMPTY
    first = trimmed.split(None, 1)[0]

    if first in DECLARATION_KEYWORDS:
        semi = trimmed.find(";")
        paren = trimmed.find("(")
        if semi >= 0 and (paren < 0 or semi < paren):
            return LineClass.DECLARATION
        return LineClass.COMPLEX

    if first in LABEL_KEYWORDS or trimmed.startswith("}"):
        return LineClass.LABEL
    return LineClass.STATEMENT


class BlockTracker:
    """Per-file brace depth and statement bookkeeping.

    ``statement_seen`` is a stack with one entry per open depth; entry 0
    is file scope and is never set.  Opens beyond ``max_depth`` slots
    are ignored while closes still pop, matching the saturation policy
    of the line-oriented scanner this replaces.
    """

    def __init__(self, max_depth: int = MAX_BLOCK_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self.max_depth = max_depth
        self._seen: list[bool] = [False]

    @property
    def depth(self) -> int:
        return len(self._seen) - 1

    @property
    def statement_seen(self) -> tuple[bool, ...]:
        return tuple(self._seen)

    def observe(self, text: str) -> bool:
        """Record the line's classification at the current depth.

        Returns True when the line is a simple declaration that follows a
        statement in the same block.
        """
        kind = classify_line(text)
        if self.depth == 0:
            return False
        if kind is LineClass.STATEMENT:
            self._seen[-1] = True
        elif kind is LineClass.DECLARATION and self._seen[-1]:
            return True
        return False

    def check(
        self,
        text: str,
        *,
        path: str,
        line_number: int,
        line_text: str,
        emit: Emit,
    ) -> bool:
        """Run the declaration-placement rule; return True if it fired."""
        if not self.observe(text):
            return False
        return emit(
            Diagnostic.create(
                path,
                line_number,
                first_non_blank(text) + 1,
                DiagnosticKind.SYNTAX,
                DECL_AFTER_STATEMENT_MESSAGE,
                C89_DECL_AFTER_STMT_001,
                line_text,
            )
        )

    def update_depth(self, text: str) -> None:
        """Apply the braces of a sanitized line, left to right."""
        for ch in text:
            if ch == "{":
                if len(self._seen) < self.max_depth:
                    self._seen.append(False)
            elif ch == "}":
                if len(self._seen) > 1:
                    self._seen.pop()
