"""Lint configuration — validation modes, limits and YAML loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Iterable, Mapping

from c_audit.core.blocks import MAX_BLOCK_DEPTH
from c_audit.core.pairing import (
    DEFAULT_ENTER_CALL,
    DEFAULT_LEAVE_CALL,
    DEFAULT_MAX_DISTANCE,
)
from c_audit.core.sink import DEFAULT_CAPACITY
from c_audit.model import MODE_DISPLAY_NAMES, ValidationMode

_logger = logging.getLogger(__name__)

DEFAULT_LINE_LENGTH_LIMIT = 256

CONFIG_FILENAMES = (".c_audit.yaml", ".c_audit.yml", "c_audit.yaml")

_INT_FIELDS = frozenset(
    {"line_length_limit", "max_diagnostics", "max_block_depth", "max_pair_distance"}
)


@dataclass(frozen=True, slots=True)
class ValidationModes:
    """Which standards / compiler checks are active."""

    amiga: bool = False
    ndk: bool = False
    c89: bool = False
    c99: bool = False
    sasc: bool = False
    vbcc: bool = False
    dice: bool = False
    memsafe: bool = False

    @classmethod
    def from_names(cls, names: Iterable[str | ValidationMode]) -> "ValidationModes":
        """Build from mode names such as ``["amiga", "c99"]`` (case-insensitive)."""
        flags: dict[str, bool] = {}
        for name in names:
            try:
                mode = ValidationMode(str(getattr(name, "value", name)).lower())
            except ValueError:
                valid = ", ".join(m.value for m in ValidationMode)
                raise ValueError(
                    f"unknown validation mode {name!r} (expected one of: {valid})"
                ) from None
            flags[mode.value] = True
        return cls(**flags)

    def is_on(self, mode: ValidationMode) -> bool:
        return bool(getattr(self, mode.value))

    def enabled(self) -> list[ValidationMode]:
        """Enabled modes in display order."""
        return [m for m in ValidationMode if self.is_on(m)]

    def describe(self) -> str:
        names = [MODE_DISPLAY_NAMES[m] for m in self.enabled()]
        return ", ".join(names) if names else "None (basic style checking only)"


@dataclass(frozen=True, slots=True)
class ModeNotice:
    """A message produced while resolving mode dependencies."""

    level: str      # "warning" | "info"
    message: str


def resolve_modes(
    requested: ValidationModes,
    *,
    quiet: bool = False,
) -> tuple[ValidationModes, list[ModeNotice]]:
    """Apply mode dependencies and defaults.

    Order matters: SAS/C forces C89, VBCC then forces C99 over it, and
    C89 is the fallback standard when nothing else picked one.  Notices
    are always returned; they are logged only when *quiet* is false.
    """
    m = requested
    notices: list[ModeNotice] = []

    if m.sasc:
        if m.c99:
            notices.append(ModeNotice(
                "warning", "SAS/C mode overrides C99 mode (SAS/C is C89-only)",
            ))
        m = replace(m, c89=True, c99=False)
    if m.vbcc:
        if m.c89:
            notices.append(ModeNotice(
                "warning", "VBCC mode overrides C89 mode (VBCC supports C99)",
            ))
        m = replace(m, c99=True, c89=False)
    if m.amiga:
        if not m.ndk:
            notices.append(ModeNotice("info", "Amiga mode enables NDK validation"))
        m = replace(m, ndk=True)
    if m.dice:
        if not m.c89:
            notices.append(ModeNotice("info", "DICE mode enables C89 validation"))
        if not m.ndk:
            notices.append(ModeNotice("info", "DICE mode enables NDK validation"))
        m = replace(m, c89=True, ndk=True)
    if m.memsafe:
        if not m.c89:
            notices.append(ModeNotice("info", "MEMSAFE mode enables C89 validation"))
        m = replace(m, c89=True)

    if not m.c89 and not m.c99 and not (m.sasc or m.vbcc or m.dice):
        m = replace(m, c89=True)

    if not quiet:
        for notice in notices:
            log = _logger.warning if notice.level == "warning" else _logger.info
            log("%s", notice.message)
    return m, notices


@dataclass(frozen=True, slots=True)
class LintConfig:
    """Immutable lint configuration.

    ``modes`` holds the *requested* modes; ``resolve_modes`` turns them
    into the effective set at the start of a run.
    """

    modes: ValidationModes = field(default_factory=ValidationModes)
    line_length_limit: int = DEFAULT_LINE_LENGTH_LIMIT
    max_diagnostics: int = DEFAULT_CAPACITY
    max_block_depth: int = MAX_BLOCK_DEPTH
    enter_call: str = DEFAULT_ENTER_CALL
    leave_call: str = DEFAULT_LEAVE_CALL
    max_pair_distance: int = DEFAULT_MAX_DISTANCE
    quiet: bool = False

    def __post_init__(self) -> None:
        if self.line_length_limit < 1:
            raise ValueError("line_length_limit must be >= 1")
        if self.max_diagnostics < 0:
            raise ValueError("max_diagnostics must be >= 0")
        if self.max_block_depth < 1:
            raise ValueError("max_block_depth must be >= 1")
        if self.max_pair_distance < 0:
            raise ValueError("max_pair_distance must be >= 0")
        if not self.enter_call or not self.leave_call:
            raise ValueError("enter_call and leave_call must be non-empty")

    # ── loading ─────────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LintConfig":
        """Build from a plain mapping (YAML document, API payload).

        ``modes`` is a list of mode names; unknown keys are ignored with
        a warning.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                _logger.warning("Ignoring unknown config key '%s'", key)
                continue
            if key == "modes":
                if isinstance(value, str):
                    value = [value]
                if not isinstance(value, (list, tuple)):
                    raise ValueError("modes must be a list of mode names")
                value = ValidationModes.from_names(value)
            elif key in _INT_FIELDS:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{key} must be an integer, got {value!r}")
            elif key == "quiet":
                value = bool(value)
            elif not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {value!r}")
            kwargs[key] = value
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path) -> "LintConfig":
        """Load configuration from a YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for config loading: pip install pyyaml")

        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"{path}: invalid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"{path}: top-level YAML value must be a mapping")
        return cls.from_mapping(data)

    @classmethod
    def discover(cls, root: Path) -> "LintConfig":
        """Load the first config file found in *root*, else defaults."""
        for name in CONFIG_FILENAMES:
            candidate = root / name
            if candidate.is_file():
                _logger.debug("Loading config from %s", candidate)
                return cls.from_yaml(candidate)
        return cls()

    def with_modes(self, extra: ValidationModes) -> "LintConfig":
        """Return a copy with *extra* modes switched on as well."""
        merged = {
            m.value: self.modes.is_on(m) or extra.is_on(m) for m in ValidationMode
        }
        return replace(self, modes=ValidationModes(**merged))

    def to_dict(self) -> dict[str, Any]:
        return {
            "modes": [m.value for m in self.modes.enabled()],
            "line_length_limit": self.line_length_limit,
            "max_diagnostics": self.max_diagnostics,
            "max_block_depth": self.max_block_depth,
            "enter_call": self.enter_call,
            "leave_call": self.leave_call,
            "max_pair_distance": self.max_pair_distance,
        }
