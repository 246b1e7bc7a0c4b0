"""Pairing monitor — enter/leave critical-section call convention.

``Forbid()`` disables task switching until the matching ``Permit()``.
The monitor checks that the calls nest correctly, that the window
between them stays short, and that the file closes every window it
opens.  Events on one line are processed in file-position order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from c_audit.model import DiagnosticKind
from c_audit.model.diagnostic import Diagnostic
from c_audit.rules import (
    PAIR_COUNT_MISMATCH_001,
    PAIR_DISTANCE_001,
    PAIR_NESTED_ENTER_001,
    PAIR_NO_LEAVE_001,
    PAIR_OPEN_AT_EOF_001,
    PAIR_UNMATCHED_LEAVE_001,
    PAIR_USAGE_001,
)

DEFAULT_ENTER_CALL = "Forbid"
DEFAULT_LEAVE_CALL = "Permit"
DEFAULT_MAX_DISTANCE = 5

Emit = Callable[[Diagnostic], bool]


@dataclass(slots=True)
class PairingState:
    active: bool = False
    enter_line: int = 0
    leave_line: int = 0
    enter_count: int = 0
    leave_count: int = 0

    @property
    def seen_any(self) -> bool:
        return self.enter_count > 0 or self.leave_count > 0


def find_call(text: str, name: str) -> int:
    """Index of ``name(`` or ``name (`` in *text*, or -1.

    The no-space form is preferred when both are present.
    """
    pos = text.find(name + "(")
    if pos < 0:
        pos = text.find(name + " (")
    return pos


class PairingMonitor:
    """Tracks enter/leave call pairing across all lines of one file."""

    def __init__(
        self,
        enter_call: str = DEFAULT_ENTER_CALL,
        leave_call: str = DEFAULT_LEAVE_CALL,
        max_distance: int = DEFAULT_MAX_DISTANCE,
    ) -> None:
        self.enter_call = enter_call
        self.leave_call = leave_call
        self.max_distance = max_distance
        self.state = PairingState()

    @property
    def _enter(self) -> str:
        return f"{self.enter_call}()"

    @property
    def _leave(self) -> str:
        return f"{self.leave_call}()"

    def check(
        self,
        text: str,
        *,
        path: str,
        line_number: int,
        line_text: str,
        emit: Emit,
    ) -> bool:
        """Process the call sites on one sanitized line.

        Returns True if at least one diagnostic was recorded; a line
        holding both calls may record two.
        """
        events: list[tuple[int, str]] = []
        enter_pos = find_call(text, self.enter_call)
        if enter_pos >= 0:
            events.append((enter_pos, "enter"))
        leave_pos = find_call(text, self.leave_call)
        if leave_pos >= 0:
            events.append((leave_pos, "leave"))
        if not events:
            return False

        fired = False
        for pos, event in sorted(events):
            if event == "enter":
                diag = self._on_enter(path, line_number, pos + 1, line_text)
            else:
                diag = self._on_leave(path, line_number, pos + 1, line_text)
            if diag is not None and emit(diag):
                fired = True
        return fired

    def _on_enter(
        self, path: str, line_number: int, column: int, line_text: str
    ) -> Diagnostic | None:
        st = self.state
        st.enter_count += 1
        if st.active:
            return Diagnostic.create(
                path, line_number, column, DiagnosticKind.WARNING,
                f"{self._enter} called without matching {self._leave} "
                f"from previous {self._enter}",
                PAIR_NESTED_ENTER_001,
                line_text,
            )
        st.active = True
        st.enter_line = line_number
        return Diagnostic.create(
            path, line_number, column, DiagnosticKind.WARNING,
            f"{self._enter} usage detected",
            PAIR_USAGE_001,
            line_text,
        )

    def _on_leave(
        self, path: str, line_number: int, column: int, line_text: str
    ) -> Diagnostic | None:
        st = self.state
        st.leave_count += 1
        if not st.active:
            return Diagnostic.create(
                path, line_number, column, DiagnosticKind.WARNING,
                f"{self._leave} called without matching {self._enter}",
                PAIR_UNMATCHED_LEAVE_001,
                line_text,
            )
        diag = None
        if line_number - st.enter_line > self.max_distance:
            diag = Diagnostic.create(
                path, line_number, column, DiagnosticKind.WARNING,
                f"Too many lines (>{self.max_distance}) between "
                f"{self._enter} and {self._leave}",
                PAIR_DISTANCE_001,
                line_text,
            )
        st.leave_line = line_number
        st.active = False
        return diag

    def finalize(self, *, path: str, emit: Emit) -> int:
        """Emit end-of-file pairing diagnostics; return how many were recorded."""
        st = self.state
        if not st.seen_any:
            return 0

        pending: list[Diagnostic] = []
        if st.enter_count > 0 and st.leave_count == 0:
            pending.append(Diagnostic.create(
                path, st.enter_line, 1, DiagnosticKind.WARNING,
                f"{self._enter} used without matching {self._leave}",
                PAIR_NO_LEAVE_001,
            ))
        elif st.enter_count > 0 and st.enter_count != st.leave_count:
            pending.append(Diagnostic.create(
                path, 1, 1, DiagnosticKind.WARNING,
                f"Mismatched {self.enter_call}()/{self.leave_call}() pairs: "
                "count mismatch",
                PAIR_COUNT_MISMATCH_001,
            ))
        # enter_count == 0 with leaves only was reported line by line.

        if st.active:
            pending.append(Diagnostic.create(
                path, st.enter_line, 1, DiagnosticKind.WARNING,
                f"File ends with active {self._enter} without matching "
                f"{self._leave}",
                PAIR_OPEN_AT_EOF_001,
            ))
        return sum(1 for diag in pending if emit(diag))
