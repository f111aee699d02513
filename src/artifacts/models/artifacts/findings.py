"""Finding models for the JSONL report."""

from __future__ import annotations

from pydantic import BaseModel, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION
from contract.diagnostics import Severity


class SourceSpan(BaseModel):
    """Source span of a flagged argument."""

    path: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int


class FindingRecord(BaseModel):
    """Schema for findings.jsonl records."""

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    finding_id: str
    rule_id: str
    severity: Severity
    message: str
    src_span: SourceSpan
    argument_text: str
    fix_title: str | None = None


class ReportSummary(BaseModel):
    """Schema for summary.json."""

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    file_count: int
    finding_count: int
    files_with_findings: list[str] = Field(default_factory=list)
    counts_by_rule: dict[str, int] = Field(default_factory=dict)


__all__ = ["FindingRecord", "ReportSummary", "SourceSpan"]
