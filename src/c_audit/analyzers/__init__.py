"""Line checkers turn one sanitized source line into findings.

Every checker follows the ``LineChecker`` protocol: it exposes ``id``,
``enabled(modes)`` and ``check(ctx) -> list[LineFinding]``.  The file
session runs enabled checkers in ``DEFAULT_CHECKERS`` order and stops at
the first checker that reports anything for the line.

Available checkers:
    - ExpectationEchoChecker: echoes ``$CODEX:`` annotations
    - C89Checker / C99Checker: language-standard conformance
    - AmigaChecker: Amiga type and naming conventions
    - NDKChecker, SASCChecker, VBCCChecker, DICEChecker: compiler syntax
    - MemSafeChecker: memory-unsafe library calls
    - MagicNumberChecker / LineLengthChecker: style
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from c_audit.model import DiagnosticKind

if TYPE_CHECKING:
    from c_audit.core.config import ValidationModes


@dataclass(frozen=True, slots=True)
class LineContext:
    """Everything a checker may look at for one line."""

    text: str                 # sanitized (comments removed)
    code: str                 # sanitized, literal contents blanked
    original: str             # raw line as read
    line_number: int
    path: str
    modes: "ValidationModes"
    line_length_limit: int


@dataclass(frozen=True, slots=True)
class LineFinding:
    """A checker result before it is bound to a file position."""

    kind: DiagnosticKind
    message: str
    rule_id: str
    column: int = 1
    with_excerpt: bool = True


class LineChecker(Protocol):
    """Every checker must expose ``id``, ``enabled()`` and ``check()``."""

    id: str

    def enabled(self, modes: "ValidationModes") -> bool:
        ...

    def check(self, ctx: LineContext) -> list[LineFinding]:
        """Inspect one line and return its findings (possibly empty)."""
        ...


def default_checkers() -> list[LineChecker]:
    """All checkers in the order they run on each line."""
    from .amiga import AmigaChecker
    from .annotations import ExpectationEchoChecker
    from .compilers import DICEChecker, NDKChecker, SASCChecker, VBCCChecker
    from .memsafe import MemSafeChecker
    from .standards import C89Checker, C99Checker
    from .style import LineLengthChecker, MagicNumberChecker

    return [
        ExpectationEchoChecker(),
        C89Checker(),
        C99Checker(),
        AmigaChecker(),
        NDKChecker(),
        SASCChecker(),
        VBCCChecker(),
        DICEChecker(),
        MemSafeChecker(),
        MagicNumberChecker(),
        LineLengthChecker(),
    ]
