"""Runner — reads files, drives a FileSession per file, builds LintResult."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from c_audit.contracts.load import validate_instance
from c_audit.core.config import LintConfig, resolve_modes
from c_audit.core.session import FileSession
from c_audit.core.sink import DiagnosticSink
from c_audit.model.run_result import LintResult
from c_audit.utils.determinism import (
    deterministic_run_id,
    deterministic_timestamp,
    normalize_path,
)

_logger = logging.getLogger(__name__)

# Raw lines longer than this are cut before analysis.
MAX_LINE_CHARS = 1023

# Override the diagnostic capacity without a config file.
MAX_DIAGNOSTICS_ENV = "C_AUDIT_MAX_DIAGNOSTICS"


def read_lines(path: Path) -> Iterator[str]:
    """Yield the lines of *path* without line terminators.

    Bytes are decoded as UTF-8 with replacement; each line is truncated
    to ``MAX_LINE_CHARS``.  Raises ``OSError`` if the file cannot be opened.
    """
    with open(path, encoding="utf-8", errors="replace", newline="") as f:
        for line in f:
            yield line.rstrip("\r\n")[:MAX_LINE_CHARS]


def split_source(source: str | Sequence[str]) -> list[str]:
    """Split in-memory source into analysis lines."""
    lines = source.splitlines() if isinstance(source, str) else list(source)
    return [line.rstrip("\r\n")[:MAX_LINE_CHARS] for line in lines]


def _capacity_from_env(default: int) -> int:
    raw = os.environ.get(MAX_DIAGNOSTICS_ENV, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{MAX_DIAGNOSTICS_ENV} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{MAX_DIAGNOSTICS_ENV} must be >= 0, got {value}")
    return value


def run_lint(
    files: Iterable[str | Path],
    config: LintConfig | None = None,
    *,
    ci_mode: bool = False,
    validate: bool = True,
) -> LintResult:
    """Lint every file in *files*, in order, into one ``LintResult``.

    Unreadable files are logged and listed in ``failed_files``; the
    remaining files are still analysed.  The diagnostic sink is shared
    by the whole run.
    """
    config = config or LintConfig()
    capacity = _capacity_from_env(config.max_diagnostics)
    if capacity != config.max_diagnostics:
        config = replace(config, max_diagnostics=capacity)

    modes, _notices = resolve_modes(config.modes, quiet=config.quiet)
    sink = DiagnosticSink(config.max_diagnostics)
    paths = [Path(f) for f in files]

    files_processed = 0
    lines_processed = 0
    failed: list[str] = []

    for path in paths:
        display = normalize_path(path)
        session = FileSession(display, sink, config=config, modes=modes)
        session.begin()
        try:
            for number, raw in enumerate(read_lines(path), start=1):
                session.feed(raw, number)
        except OSError as exc:
            _logger.error("Could not open file '%s': %s", display, exc.strerror or exc)
            failed.append(display)
            continue
        session.end()
        files_processed += 1
        lines_processed += session.state.lines
        _logger.debug("Analysed %s (%d lines)", display, session.state.lines)

    if sink.overflowed:
        _logger.warning("%d diagnostics dropped after reaching capacity", sink.dropped)

    result = LintResult(
        run_id=deterministic_run_id([p.as_posix() for p in paths], ci_mode=ci_mode),
        created_at=deterministic_timestamp(ci_mode),
        config=config.to_dict(),
        modes=[m.value for m in modes.enabled()],
        files_processed=files_processed,
        lines_processed=lines_processed,
        diagnostics=sink.diagnostics,
        overflowed=sink.overflowed,
        failed_files=failed,
    )
    if validate:
        validate_instance(result.to_dict(), "lint_result.schema.json")
    return result
