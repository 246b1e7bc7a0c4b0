"""Diagnostic sink — bounded, append-only store shared by one run."""

from __future__ import annotations

import logging
from typing import Iterator

from c_audit.model import DiagnosticKind
from c_audit.model.diagnostic import Diagnostic
from c_audit.rules import SYS_DIAGNOSTIC_OVERFLOW_001

_logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000

OVERFLOW_MESSAGE = (
    "Maximum diagnostic count reached. Further diagnostics will be ignored."
)


class DiagnosticSink:
    """Keeps diagnostics in insertion order up to *capacity*.

    The first diagnostic past capacity is replaced by a single overflow
    notice; that one and every later diagnostic are dropped.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self._items: list[Diagnostic] = []
        self._overflow: Diagnostic | None = None
        self.dropped = 0

    def add(self, diagnostic: Diagnostic) -> bool:
        """Record *diagnostic*; return False if it was dropped."""
        if len(self._items) < self.capacity:
            self._items.append(diagnostic)
            return True

        self.dropped += 1
        if self._overflow is None:
            _logger.warning(
                "Diagnostic capacity (%d) reached at %s:%d; further "
                "diagnostics ignored",
                self.capacity,
                diagnostic.path,
                diagnostic.line,
            )
            self._overflow = Diagnostic.create(
                diagnostic.path,
                diagnostic.line,
                1,
                DiagnosticKind.WARNING,
                OVERFLOW_MESSAGE,
                SYS_DIAGNOSTIC_OVERFLOW_001,
            )
        return False

    @property
    def overflowed(self) -> bool:
        return self._overflow is not None

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Recorded diagnostics followed by the overflow notice, if any."""
        if self._overflow is None:
            return list(self._items)
        return [*self._items, self._overflow]

    def __len__(self) -> int:
        return len(self._items) + (1 if self._overflow is not None else 0)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)
