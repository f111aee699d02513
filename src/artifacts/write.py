from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.generators import FindingsGenerator
from contract.artifacts import FINDINGS_JSONL, SUMMARY_JSON
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import LintConfig


def generate_report(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: LintConfig | None = None,
) -> dict[str, object]:
    """Analyze a source tree and write the findings report.

    Args:
        root: Root directory of the sources to analyze
        out_dir: Optional output directory for the report
        config: Optional configuration; loaded from root when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    findings_gen = FindingsGenerator()
    _, summary = findings_gen.generate(
        root=root,
        out_dir=out_dir,
        include_patterns=config.include,
        exclude_patterns=config.exclude_patterns(),
        nested_gitignore=config.nested_gitignore,
        skip_build_dirs=config.skip_build_dirs,
    )

    return {
        "file_count": summary["file_count"],
        "finding_count": summary["finding_count"],
        "artifacts": [str(out_dir / name) for name in (FINDINGS_JSONL, SUMMARY_JSON)],
    }
