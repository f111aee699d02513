"""Findings report generator."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.findings import FindingRecord, ReportSummary, SourceSpan
from artifacts.utils import _get_output_dir_name, _write_json, _write_jsonl
from contract.artifacts import FINDINGS_JSONL, SUMMARY_JSON, build_finding_id, normalize_expr
from contract.diagnostics import FIX_TITLE
from fix.workspace import load_document
from rules.analyzer import analyze_document
from scan.files import find_csharp_files

if TYPE_CHECKING:
    from pathlib import Path

    from rules.emitter import Finding

logger = logging.getLogger(__name__)


def finding_to_record(finding: Finding) -> FindingRecord:
    location = finding.location
    start_line = location.start_line if location else 0
    start_col = location.start_col if location else 0
    return FindingRecord(
        finding_id=build_finding_id(finding.path, start_line, start_col, finding.rule_id),
        rule_id=finding.rule_id,
        severity=finding.severity,
        message=finding.message,
        src_span=SourceSpan(
            path=finding.path,
            start_line=start_line,
            start_col=start_col,
            end_line=location.end_line if location else 0,
            end_col=location.end_col if location else 0,
        ),
        argument_text=normalize_expr(finding.argument.to_text()),
        fix_title=FIX_TITLE,
    )


class FindingsGenerator:
    """Generates findings.jsonl and summary.json from C# source files."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "findings"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
        nested_gitignore: bool = False,
        skip_build_dirs: bool = True,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Generate the findings report."""
        out_dir.mkdir(parents=True, exist_ok=True)

        out_dir_name = _get_output_dir_name(out_dir, root)
        records: list[FindingRecord] = []
        file_count = 0

        for file_path in find_csharp_files(
            root,
            output_dir=out_dir_name,
            include_patterns=include_patterns,
            exclude_patterns=exclude_patterns,
            nested_gitignore=nested_gitignore,
            skip_build_dirs=skip_build_dirs,
        ):
            relative_path = file_path.relative_to(root).as_posix()
            document = load_document(file_path, relative_path)
            if document is None:
                continue
            file_count += 1
            records.extend(finding_to_record(finding) for finding in analyze_document(document))

        records.sort(
            key=lambda record: (
                record.src_span.path,
                record.src_span.start_line,
                record.src_span.start_col,
                record.rule_id,
            )
        )

        summary = ReportSummary(
            file_count=file_count,
            finding_count=len(records),
            files_with_findings=sorted({record.src_span.path for record in records}),
            counts_by_rule=dict(Counter(record.rule_id for record in records)),
        )

        _write_jsonl(out_dir / FINDINGS_JSONL, records)
        _write_json(out_dir / SUMMARY_JSON, summary)
        logger.debug("%s: %d finding(s) in %d file(s)", self.name, len(records), file_count)

        record_dicts = [record.model_dump() for record in records]
        return record_dicts, summary.model_dump()


__all__ = ["FINDINGS_JSONL", "FindingsGenerator", "finding_to_record"]
