"""
Lint Schemas
============
Request and response models for lint endpoints.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LintRequest(BaseModel):
    """Request to lint one C source file"""

    source: str = Field(..., description="Complete C source text")
    filename: str = Field(default="<source>", description="Name used in diagnostics")
    modes: List[str] = Field(
        default_factory=list,
        description="Validation modes: amiga, ndk, c89, c99, sasc, vbcc, dice, memsafe",
    )
    line_length_limit: Optional[int] = Field(
        default=None, ge=1, description="Maximum line length before a style diagnostic"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "source": "int main(void)\n{\n    return 0;\n}\n",
                "filename": "main.c",
                "modes": ["amiga"],
                "line_length_limit": 100,
            }
        }
    )


class DiagnosticOut(BaseModel):
    """One diagnostic"""

    path: str
    line: int
    column: int
    kind: str
    message: str
    rule_id: str
    excerpt: Optional[str] = None


class LintSummary(BaseModel):
    """Totals for one lint request"""

    lines: int = Field(default=0)
    diagnostics: int = Field(default=0)
    final_depth: int = Field(default=0)
    ended_in_comment: bool = Field(default=False)
    modes: List[str] = Field(default_factory=list)


class LintResponse(BaseModel):
    """Response from a lint operation"""

    status: str = Field(..., description="Lint status: complete")
    summary: LintSummary
    diagnostics: List[DiagnosticOut] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
