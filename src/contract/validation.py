"""Validation helpers for report artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

import orjson
from pydantic import ValidationError

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    REPORT_ARTIFACT_SPECS,
)
from contract.models import FindingRecord, ReportSummary

if TYPE_CHECKING:
    from pathlib import Path


class _SchemaModel(Protocol):
    schema_version: int

    @classmethod
    def model_validate(cls, obj: Any) -> _SchemaModel: ...


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)
    record_counts: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(
    artifacts_dir: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    summary: ReportSummary | None = None
    for artifact_name, spec in REPORT_ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue

        if spec.format == "jsonl":
            result.record_counts[artifact_name] = _validate_jsonl(
                artifact_name,
                path,
                FindingRecord,
                result,
                strict_schema_version=strict_schema_version,
            )
        elif spec.format == "json":
            summary = _validate_summary(
                artifact_name,
                path,
                result,
                strict_schema_version=strict_schema_version,
            )
        else:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message=f"Unsupported artifact format: {spec.format}.",
                )
            )

    findings_count = result.record_counts.get("findings")
    if summary is not None and findings_count is not None:
        if summary.finding_count != findings_count:
            result.errors.append(
                ValidationMessage(
                    artifact="summary",
                    path=artifacts_dir / REPORT_ARTIFACT_SPECS["summary"].filename,
                    message=(
                        f"finding_count is {summary.finding_count} but "
                        f"findings.jsonl holds {findings_count} record(s)."
                    ),
                )
            )

    return result


def _validate_jsonl(
    artifact_name: str,
    path: Path,
    model: type[_SchemaModel],
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> int:
    """Validate each line; return the number of well-formed records."""
    try:
        handle = path.open("rb")
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return 0

    valid_records = 0
    missing_schema_emitted = False
    mismatch_schema_emitted = False
    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Invalid JSON: {exc}.",
                    )
                )
                continue

            schema_present = isinstance(data, dict) and "schema_version" in data
            try:
                record = model.model_validate(data)
            except ValidationError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
                continue

            valid_records += 1
            if not schema_present:
                if not missing_schema_emitted:
                    _check_schema_version(
                        artifact_name,
                        path,
                        line_number,
                        schema_present,
                        record.schema_version,
                        result,
                        strict_schema_version=strict_schema_version,
                    )
                    missing_schema_emitted = True
                continue

            if (
                record.schema_version != ARTIFACT_SCHEMA_VERSION
                and not mismatch_schema_emitted
            ):
                _check_schema_version(
                    artifact_name,
                    path,
                    line_number,
                    schema_present,
                    record.schema_version,
                    result,
                    strict_schema_version=strict_schema_version,
                )
                mismatch_schema_emitted = True

    return valid_records


def _validate_summary(
    artifact_name: str,
    path: Path,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> ReportSummary | None:
    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return None

    if not isinstance(raw, dict):
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message="Expected JSON object for summary.json.",
            )
        )
        return None

    schema_present = "schema_version" in raw
    try:
        summary = ReportSummary.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return None

    _check_schema_version(
        artifact_name,
        path,
        None,
        schema_present,
        summary.schema_version,
        result,
        strict_schema_version=strict_schema_version,
    )
    return summary


def _check_schema_version(
    artifact_name: str,
    path: Path,
    line: int | None,
    schema_present: bool,
    schema_version: int,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> None:
    if schema_present and schema_version != ARTIFACT_SCHEMA_VERSION:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                line=line,
                message=(
                    "Schema version mismatch: "
                    f"expected {ARTIFACT_SCHEMA_VERSION}, got {schema_version}."
                ),
            )
        )
        return

    if not schema_present:
        message = f"Missing schema_version; defaulted to {ARTIFACT_SCHEMA_VERSION}."
        if strict_schema_version:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line,
                    message=message,
                )
            )
        else:
            result.warnings.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line,
                    message=message,
                )
            )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
