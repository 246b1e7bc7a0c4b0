"""CLI entry-point for c_audit.

Usage:
    python -m c_audit FILES... [--amiga] [--ndk] [--c89] [--c99] [--sasc]
                               [--vbcc] [--dice] [--memsafe] [--quiet]
                               [--format text|json|markdown] [--output FILE]
                               [--config FILE] [--line-length N]
                               [--max-diagnostics N] [--ci] [--verbose]
    python -m c_audit validate <instance.json> <schema_name>
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from c_audit import __version__
from c_audit.core.config import LintConfig, ValidationModes
from c_audit.core.discover import discover_sources
from c_audit.core.runner import run_lint
from c_audit.model import ValidationMode
from c_audit.reports.exporters import export_result
from c_audit.utils.exit_codes import ExitCode

_logger = logging.getLogger("c_audit")

_MODE_HELP = {
    ValidationMode.C89: "Check compliance with ANSI C89 (default when no standard is chosen).",
    ValidationMode.C99: "Check compliance with C99.",
    ValidationMode.AMIGA: "Check Amiga C best practices such as exec types. Implies --ndk.",
    ValidationMode.NDK: "Flag keywords that should use NDK <clib/compiler-specific.h> macros.",
    ValidationMode.SASC: "Check SAS/C compatibility. Implies --c89 but allows C++ comments.",
    ValidationMode.VBCC: "Check VBCC compatibility. Implies --c99.",
    ValidationMode.DICE: "Check DICE keyword compatibility. Implies --c89 and --ndk.",
    ValidationMode.MEMSAFE: "Check for memory-unsafe C library functions. Implies --c89.",
}

_EPILOG = """\
examples:
  c-audit main.c --amiga          check main.c for Amiga standards
  c-audit 'src/**/*.c' --amiga    check every .c file below src/
  c-audit main.c --c99 --vbcc     check for C99 and VBCC compatibility
  c-audit main.c --memsafe --quiet
                                  memory-safety check, diagnostics only
"""


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="c-audit",
        description="Amiga C linter and style checker.",
    )
    sub = p.add_subparsers(dest="command")

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON file against a bundled schema.",
    )
    val_p.add_argument("instance", help="Path to the JSON file to validate.")
    val_p.add_argument(
        "schema_name",
        help="Schema filename (e.g. lint_result.schema.json).",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return p


def _build_lint_parser() -> argparse.ArgumentParser:
    """Parser for the default mode: ``c-audit FILES... [flags]``."""
    p = argparse.ArgumentParser(
        prog="c-audit",
        description="Amiga C linter and style checker.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "files",
        nargs="+",
        help="C source files, directories or glob patterns.",
    )
    modes = p.add_argument_group("validation modes")
    for mode in ValidationMode:
        modes.add_argument(
            f"--{mode.value}",
            dest=f"mode_{mode.value}",
            action="store_true",
            default=False,
            help=_MODE_HELP[mode],
        )
    p.add_argument(
        "--quiet",
        action="store_true",
        default=False,
        help="Suppress the summary and only output diagnostics.",
    )
    p.add_argument(
        "--format",
        choices=["text", "json", "markdown"],
        default="text",
        help="Output format (default: text).",
    )
    p.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to FILE instead of stdout.",
    )
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: .c_audit.yaml in the working directory).",
    )
    p.add_argument(
        "--line-length",
        dest="line_length",
        type=int,
        default=None,
        help="Maximum line length before a style diagnostic.",
    )
    p.add_argument(
        "--max-diagnostics",
        dest="max_diagnostics",
        type=int,
        default=None,
        help="Stop recording diagnostics after N (one overflow notice follows).",
    )
    p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Enable deterministic output (stable IDs and timestamps).",
    )
    p.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Log debug information to stderr.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return p


def _load_config(args: argparse.Namespace) -> LintConfig:
    if args.config is not None:
        config = LintConfig.from_yaml(args.config)
    else:
        config = LintConfig.discover(Path.cwd())

    requested = ValidationModes.from_names(
        m for m in ValidationMode if getattr(args, f"mode_{m.value}")
    )
    config = config.with_modes(requested)

    overrides = {}
    if args.line_length is not None:
        overrides["line_length_limit"] = args.line_length
    if args.max_diagnostics is not None:
        overrides["max_diagnostics"] = args.max_diagnostics
    if args.quiet:
        overrides["quiet"] = True
    return replace(config, **overrides) if overrides else config


def _handle_validate(args: argparse.Namespace) -> int:
    import jsonschema

    from c_audit.contracts.load import validate_file

    try:
        validate_file(Path(args.instance), args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        # Exit code contract: 2 = unreadable file / bad JSON / unknown schema
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def _handle_lint(args: argparse.Namespace) -> int:
    try:
        config = _load_config(args)
    except (OSError, ValueError) as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return ExitCode.ERROR

    files = discover_sources(args.files)
    if not files:
        print("No input files specified.", file=sys.stderr)
        return ExitCode.ERROR

    try:
        result = run_lint(files, config, ci_mode=args.ci_mode)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    for failed in result.failed_files:
        print(f"Error: Cannot open file '{failed}'", file=sys.stderr)

    report = export_result(result, args.format, quiet=config.quiet)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(report, encoding="utf-8")
    elif report:
        sys.stdout.write(report)

    if result.failed_files:
        return ExitCode.ERROR
    if result.has_diagnostics:
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 clean, 1 diagnostics, 2 error)."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    # `c-audit validate ...` is the only subcommand; anything else is a
    # list of files for the default lint mode.
    first_positional = next(
        (a for a in effective_argv if not a.startswith("-")), None
    )
    if first_positional == "validate":
        args = _build_parser().parse_args(effective_argv)
        return _handle_validate(args)

    args = _build_lint_parser().parse_args(effective_argv)
    _configure_logging(args.verbose)
    _logger.debug("c-audit %s, files: %s", __version__, args.files)
    return _handle_lint(args)


if __name__ == "__main__":
    raise SystemExit(main())
