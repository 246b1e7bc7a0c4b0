"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — no diagnostics recorded
  1   Violation — at least one diagnostic (or a schema validation failure)
  2   Error — usage error, unreadable file, invalid configuration
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
