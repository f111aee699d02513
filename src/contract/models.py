"""Report models exposed at the contract boundary."""

from artifacts.models.artifacts.findings import FindingRecord, ReportSummary, SourceSpan

__all__ = ["FindingRecord", "ReportSummary", "SourceSpan"]
