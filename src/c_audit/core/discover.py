"""File discovery — expand CLI arguments into C source files."""

from __future__ import annotations

import glob
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

# Directory basenames never descended into.
_DEFAULT_EXCLUDES = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".venv",
        "venv",
        "__pycache__",
        "node_modules",
        "dist",
        "build",
        ".tox",
    }
)

C_SOURCE_EXTS: tuple[str, ...] = (".c", ".h")


@dataclass(frozen=True)
class DiscoverConfig:
    """Configuration for file discovery.

    All parameters are optional and have sensible defaults.
    """

    include_exts: tuple[str, ...] = C_SOURCE_EXTS
    ignore_dirs: frozenset[str] = _DEFAULT_EXCLUDES


def _has_glob(arg: str) -> bool:
    return any(ch in arg for ch in "*?[")


def _walk_dir(root: Path, cfg: DiscoverConfig) -> list[Path]:
    results: list[Path] = []
    for p in root.rglob("*"):
        if not p.is_file():
            continue
        if p.suffix.lower() not in cfg.include_exts:
            continue
        # skip if any parent is in ignore_dirs
        if any(part in cfg.ignore_dirs for part in p.relative_to(root).parts[:-1]):
            continue
        results.append(p)
    return sorted(results)


def discover_sources(
    args: Iterable[str | Path],
    cfg: DiscoverConfig | None = None,
) -> list[Path]:
    """Expand *args* into an ordered, de-duplicated list of files.

    * an existing directory is searched recursively for ``*.c`` / ``*.h``;
    * a glob pattern is expanded (``**`` allowed);
    * anything else is passed through as-is, so a missing file still
      reaches the runner and is reported there.

    Explicit files keep their argument order; each expansion is sorted.
    """
    cfg = cfg or DiscoverConfig()
    seen: set[Path] = set()
    out: list[Path] = []

    def add(p: Path) -> None:
        if p not in seen:
            seen.add(p)
            out.append(p)

    for arg in args:
        text = str(arg)
        path = Path(text)
        if path.is_dir():
            for p in _walk_dir(path, cfg):
                add(p)
        elif _has_glob(text) and not path.exists():
            for match in sorted(glob.glob(text, recursive=True)):
                mp = Path(match)
                if mp.is_file():
                    add(mp)
        else:
            add(path)
    return out
