"""c_audit — line-oriented C source analyzer for Amiga-era codebases."""

__all__ = [
    "__version__",
    "lint_source",
    "lint_paths",
    "validate_instance",
]
__version__ = "0.1.0"

# Programmatic entrypoints, see c_audit.api.
from c_audit.api import (  # noqa: E402, F401
    lint_paths,
    lint_source,
    validate_instance,
)
