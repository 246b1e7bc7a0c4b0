"""Enums shared across the engine, checkers and reports."""

from __future__ import annotations

from enum import Enum


class DiagnosticKind(str, Enum):
    """Diagnostic category — printed in brackets in the text report."""

    SYNTAX = "syntax"
    STYLE = "style"
    WARNING = "warning"
    COMPILER = "compiler"
    COMMENT = "comment"

    @property
    def label(self) -> str:
        return self.value.upper()


class ValidationMode(str, Enum):
    """Canonical validation mode identifiers (CLI flags, config, API)."""

    AMIGA = "amiga"
    NDK = "ndk"
    C89 = "c89"
    C99 = "c99"
    SASC = "sasc"
    VBCC = "vbcc"
    DICE = "dice"
    MEMSAFE = "memsafe"


# Display names used by the "Active validation modes" summary line.
MODE_DISPLAY_NAMES: dict[ValidationMode, str] = {
    ValidationMode.AMIGA: "Amiga",
    ValidationMode.NDK: "NDK",
    ValidationMode.C89: "C89",
    ValidationMode.C99: "C99",
    ValidationMode.SASC: "SAS/C",
    ValidationMode.VBCC: "VBCC",
    ValidationMode.DICE: "DICE",
    ValidationMode.MEMSAFE: "MEMSAFE",
}
