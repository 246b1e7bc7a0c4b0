"""
Lint Router
===========
Endpoints for linting C source.
"""
from fastapi import APIRouter, HTTPException

from c_audit import api as core_api
from c_audit.core.config import LintConfig, ValidationModes, resolve_modes
from c_audit.web_api.config import settings
from c_audit.web_api.schemas.lint import (
    DiagnosticOut,
    LintRequest,
    LintResponse,
    LintSummary,
)

router = APIRouter()


@router.post("/", response_model=LintResponse)
async def run_lint(request: LintRequest):
    """
    Lint a single C source file.

    - **source**: file contents
    - **filename**: name reported in diagnostics
    - **modes**: validation modes to enable
    - **line_length_limit**: optional line-length override
    """
    if len(request.source.encode("utf-8")) > settings.MAX_SOURCE_BYTES:
        raise HTTPException(status_code=413, detail="Source too large")

    try:
        modes = ValidationModes.from_names(request.modes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    overrides = {"modes": modes, "max_diagnostics": settings.MAX_DIAGNOSTICS}
    if request.line_length_limit is not None:
        overrides["line_length_limit"] = request.line_length_limit
    config = LintConfig(**overrides)

    report = core_api.lint_source(request.source, path=request.filename, config=config)
    effective, _ = resolve_modes(config.modes)

    return LintResponse(
        status="complete",
        summary=LintSummary(
            lines=report.lines,
            diagnostics=len(report.diagnostics),
            final_depth=report.final_depth,
            ended_in_comment=report.ended_in_comment,
            modes=[m.value for m in effective.enabled()],
        ),
        diagnostics=[
            DiagnosticOut(
                path=d.path,
                line=d.line,
                column=d.column,
                kind=d.kind.value,
                message=d.message,
                rule_id=d.rule_id,
                excerpt=d.excerpt or None,
            )
            for d in report.diagnostics
        ],
    )
