"""File session — drives the per-line pipeline over one file.

Per line::

    raw → sanitize → line-comment check → declaration placement (C89)
        → enter/leave pairing → line checkers → brace depth update

The first stage that records a diagnostic ends the checks for that line;
the brace depth update always runs.  ``ScanState`` belongs to exactly
one file and is rebuilt by ``begin()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from c_audit.analyzers import LineChecker, LineContext, default_checkers
from c_audit.core.blocks import BlockTracker
from c_audit.core.config import LintConfig, ValidationModes, resolve_modes
from c_audit.core.pairing import PairingMonitor, PairingState
from c_audit.core.sanitize import blank_literals, sanitize_line
from c_audit.core.sink import DiagnosticSink
from c_audit.model import DiagnosticKind, ValidationMode
from c_audit.model.diagnostic import Diagnostic
from c_audit.rules import C89_LINE_COMMENT_001, LEX_UNTERMINATED_COMMENT_001

_logger = logging.getLogger(__name__)

LINE_COMMENT_MESSAGE = "C++ comments ('//') are not allowed in C89."
UNTERMINATED_COMMENT_MESSAGE = "File ends with an unterminated '/*' comment."


@dataclass(slots=True)
class ScanState:
    """Cross-line state for one file."""

    blocks: BlockTracker
    pairing: PairingMonitor
    in_comment: bool = False
    lines: int = 0


@dataclass(frozen=True, slots=True)
class FileReport:
    """What one file contributed, plus the state it ended in."""

    path: str
    lines: int
    diagnostics: list[Diagnostic] = field(default_factory=list)
    final_depth: int = 0
    ended_in_comment: bool = False
    pairing: PairingState = field(default_factory=PairingState)

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "lines": self.lines,
            "final_depth": self.final_depth,
            "ended_in_comment": self.ended_in_comment,
            "pairing": {
                "active": self.pairing.active,
                "enter_count": self.pairing.enter_count,
                "leave_count": self.pairing.leave_count,
            },
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


class FileSession:
    """Runs every check over the lines of one file.

    *modes* are the effective modes; when omitted they are resolved from
    ``config.modes``.  Diagnostics go to the shared *sink*; ``end()``
    returns the ones this file added.
    """

    def __init__(
        self,
        path: str,
        sink: DiagnosticSink,
        *,
        config: LintConfig | None = None,
        modes: ValidationModes | None = None,
        checkers: Sequence[LineChecker] | None = None,
    ) -> None:
        self.path = path
        self.sink = sink
        self.config = config or LintConfig()
        if modes is None:
            modes, _ = resolve_modes(self.config.modes, quiet=self.config.quiet)
        self.modes = modes
        all_checkers = checkers if checkers is not None else default_checkers()
        self.checkers = [c for c in all_checkers if c.enabled(self.modes)]
        self._recorded: list[Diagnostic] = []
        self.state = self._fresh_state()

    def _fresh_state(self) -> ScanState:
        return ScanState(
            blocks=BlockTracker(self.config.max_block_depth),
            pairing=PairingMonitor(
                self.config.enter_call,
                self.config.leave_call,
                self.config.max_pair_distance,
            ),
        )

    def _emit(self, diagnostic: Diagnostic) -> bool:
        if self.sink.add(diagnostic):
            self._recorded.append(diagnostic)
            return True
        return False

    # ── lifecycle ───────────────────────────────────────────────────

    def begin(self) -> None:
        """Reset all per-file state."""
        self.state = self._fresh_state()
        self._recorded = []

    def feed(self, raw: str, line_number: int) -> bool:
        """Process one raw line; return True if it produced a diagnostic."""
        st = self.state
        st.lines = max(st.lines, line_number)

        sanitized = sanitize_line(raw, st.in_comment)
        st.in_comment = sanitized.in_comment
        text = sanitized.text

        try:
            return self._check_line(raw, text, sanitized.line_comment_column, line_number)
        finally:
            st.blocks.update_depth(text)

    def _check_line(
        self, raw: str, text: str, comment_column: int | None, line_number: int
    ) -> bool:
        st = self.state
        modes = self.modes

        if (
            comment_column is not None
            and modes.is_on(ValidationMode.C89)
            and not modes.is_on(ValidationMode.SASC)
        ):
            if self._emit(Diagnostic.create(
                self.path, line_number, comment_column, DiagnosticKind.SYNTAX,
                LINE_COMMENT_MESSAGE, C89_LINE_COMMENT_001, raw,
            )):
                return True

        if not text.strip():
            return False

        common = {"path": self.path, "line_number": line_number, "line_text": raw, "emit": self._emit}

        if modes.is_on(ValidationMode.C89) and st.blocks.check(text, **common):
            return True

        if st.pairing.check(text, **common):
            return True

        ctx = LineContext(
            text=text,
            code=blank_literals(text),
            original=raw,
            line_number=line_number,
            path=self.path,
            modes=modes,
            line_length_limit=self.config.line_length_limit,
        )
        for checker in self.checkers:
            fired = False
            for finding in checker.check(ctx):
                diag = Diagnostic.create(
                    self.path,
                    line_number,
                    finding.column,
                    finding.kind,
                    finding.message,
                    finding.rule_id,
                    raw if finding.with_excerpt else None,
                )
                fired = self._emit(diag) or fired
            if fired:
                return True
        return False

    def end(self) -> list[Diagnostic]:
        """Emit end-of-file diagnostics and return this file's diagnostics."""
        st = self.state
        if st.in_comment:
            self._emit(Diagnostic.create(
                self.path, max(st.lines, 1), 1, DiagnosticKind.WARNING,
                UNTERMINATED_COMMENT_MESSAGE, LEX_UNTERMINATED_COMMENT_001,
            ))
        st.pairing.finalize(path=self.path, emit=self._emit)
        _logger.debug(
            "%s: %d lines, %d diagnostics, final depth %d",
            self.path, st.lines, len(self._recorded), st.blocks.depth,
        )
        return list(self._recorded)

    def report(self) -> FileReport:
        st = self.state
        return FileReport(
            path=self.path,
            lines=st.lines,
            diagnostics=list(self._recorded),
            final_depth=st.blocks.depth,
            ended_in_comment=st.in_comment,
            pairing=st.pairing.state,
        )


def scan_lines(
    lines: Iterable[str],
    path: str,
    sink: DiagnosticSink,
    *,
    config: LintConfig | None = None,
    modes: ValidationModes | None = None,
) -> FileReport:
    """Run one complete session over *lines* (numbered from 1)."""
    session = FileSession(path, sink, config=config, modes=modes)
    session.begin()
    for number, raw in enumerate(lines, start=1):
        session.feed(raw, number)
    session.end()
    return session.report()
