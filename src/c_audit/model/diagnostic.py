"""Diagnostic — the normalized engine output for a single detected issue."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from . import DiagnosticKind

# Excerpt bound, including the truncation marker.
EXCERPT_LIMIT = 120
TRUNCATION_MARKER = "..."
MESSAGE_LIMIT = 255


def make_excerpt(line: str | None) -> str:
    """Bound a source line for display.

    Lines longer than ``EXCERPT_LIMIT`` keep their first 117 characters
    followed by ``...`` so the excerpt never exceeds the limit.
    """
    if not line:
        return ""
    if len(line) <= EXCERPT_LIMIT:
        return line
    keep = EXCERPT_LIMIT - len(TRUNCATION_MARKER)
    return line[:keep] + TRUNCATION_MARKER


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Immutable diagnostic record.

    Corresponds to ``diagnostics[]`` in ``lint_result.schema.json``.
    """

    path: str
    line: int
    column: int
    kind: DiagnosticKind
    message: str
    rule_id: str
    excerpt: str = ""

    @classmethod
    def create(
        cls,
        path: str,
        line: int,
        column: int,
        kind: DiagnosticKind,
        message: str,
        rule_id: str,
        line_text: str | None = None,
    ) -> "Diagnostic":
        """Build a diagnostic, applying the message and excerpt bounds."""
        return cls(
            path=path,
            line=line,
            column=column,
            kind=kind,
            message=message[:MESSAGE_LIMIT],
            rule_id=rule_id,
            excerpt=make_excerpt(line_text),
        )

    @property
    def fingerprint(self) -> str:
        return make_fingerprint(self.rule_id, self.path, self.line, self.message)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        d: dict = {
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "kind": self.kind.value,
            "message": self.message,
            "rule_id": self.rule_id,
            "fingerprint": self.fingerprint,
        }
        if self.excerpt:
            d["excerpt"] = self.excerpt
        return d


def make_fingerprint(rule_id: str, rel_path: str, line: int, message: str) -> str:
    """Deterministic diagnostic fingerprint: sha256(rule|path|line|message)."""
    rel_path = rel_path.replace("\\", "/")
    payload = "|".join([rule_id, rel_path, str(line), message.strip()])
    return "sha256:" + hashlib.sha256(payload.encode()).hexdigest()
