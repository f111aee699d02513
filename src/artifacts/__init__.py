"""Report generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import LintConfig


def generate_report(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: LintConfig | None = None,
) -> dict[str, object]:
    """Generate the report via lazy import to avoid package import cycles."""
    from artifacts.write import generate_report as _generate_report

    return _generate_report(root=root, out_dir=out_dir, config=config)


__all__ = ["generate_report"]
