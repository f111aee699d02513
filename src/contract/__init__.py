"""Stable contract surface for formattable-lint.

Diagnostic identity and report artifact definitions that editors and CI
tooling depend on.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    FINDINGS_JSONL,
    REPORT_ARTIFACT_SPECS,
    SUMMARY_JSON,
    ReportArtifactSpec,
)
from contract.diagnostics import (
    DIAGNOSTIC_ID,
    FIX_TITLE,
    PRESERVE_FORMATTABLE_STRING,
    DiagnosticDescriptor,
)


def __getattr__(name: str) -> object:
    if name in {"FindingRecord", "ReportSummary", "SourceSpan"}:
        from contract.models import FindingRecord, ReportSummary, SourceSpan

        return {
            "FindingRecord": FindingRecord,
            "ReportSummary": ReportSummary,
            "SourceSpan": SourceSpan,
        }[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "DIAGNOSTIC_ID",
    "FINDINGS_JSONL",
    "FIX_TITLE",
    "PRESERVE_FORMATTABLE_STRING",
    "REPORT_ARTIFACT_SPECS",
    "SUMMARY_JSON",
    "DiagnosticDescriptor",
    "FindingRecord",
    "ReportArtifactSpec",
    "ReportSummary",
    "SourceSpan",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
