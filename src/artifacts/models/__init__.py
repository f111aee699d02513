"""Model namespace for formattable-lint report schemas."""

from artifacts.models.artifacts.findings import FindingRecord, ReportSummary, SourceSpan

__all__ = ["FindingRecord", "ReportSummary", "SourceSpan"]
