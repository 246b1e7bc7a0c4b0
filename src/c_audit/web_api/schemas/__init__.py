"""
Pydantic Schemas
================
Request and response models for the API.
"""
from .lint import DiagnosticOut, LintRequest, LintResponse, LintSummary

__all__ = ["DiagnosticOut", "LintRequest", "LintResponse", "LintSummary"]
