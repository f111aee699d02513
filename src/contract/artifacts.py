"""Report artifact contract definitions.

Filenames, formats and the schema version of everything ``report`` writes.
Downstream tooling (CI annotations, dashboards) reads these files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Schema version for report artifacts.
ARTIFACT_SCHEMA_VERSION = 1

FINDINGS_JSONL = "findings.jsonl"
SUMMARY_JSON = "summary.json"


@dataclass(frozen=True)
class ReportArtifactSpec:
    """Specification for one report artifact."""

    filename: str
    format: str
    required_fields_note: str


# ---------------------------------------------------------------------------
# Deterministic finding_id
# ---------------------------------------------------------------------------
# Canonical format: finding:{path}@L{line}:C{col}:{rule_id}
# - path: POSIX relative path (forward slashes, no ./ prefix)
# - line/col: 1-based integers

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_expr(raw_expr: str) -> str:
    """Collapse whitespace runs so argument text fits on one line."""
    return _WHITESPACE_RUN.sub(" ", raw_expr.strip())


def build_finding_id(path: str, start_line: int, start_col: int, rule_id: str) -> str:
    return f"finding:{path}@L{start_line}:C{start_col}:{rule_id}"


REPORT_ARTIFACT_SPECS: dict[str, ReportArtifactSpec] = {
    "findings": ReportArtifactSpec(
        filename=FINDINGS_JSONL,
        format="jsonl",
        required_fields_note="FindingRecord fields required by contract.",
    ),
    "summary": ReportArtifactSpec(
        filename=SUMMARY_JSON,
        format="json",
        required_fields_note="ReportSummary fields required by contract.",
    ),
}
