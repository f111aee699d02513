"""Host-side sequencing of fixes and file round-tripping."""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fix.document import Document
from fix.rewrite import compute_fix
from rules.analyzer import analyze_document

if TYPE_CHECKING:
    from pathlib import Path

    from rules.cancellation import CancellationToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixResult:
    """Outcome of fixing every finding in one document."""

    original: Document
    fixed: Document
    applied: int
    remaining: int

    @property
    def changed(self) -> bool:
        return self.original.text != self.fixed.text

    def unified_diff(self) -> str:
        return "".join(
            difflib.unified_diff(
                self.original.text.splitlines(keepends=True),
                self.fixed.text.splitlines(keepends=True),
                fromfile=f"a/{self.original.path}",
                tofile=f"b/{self.fixed.path}",
            )
        )


def fix_all(
    document: Document,
    *,
    cancellation: CancellationToken | None = None,
) -> FixResult:
    """Fix every finding in a document, one whole-document edit at a time.

    Each fix is applied to a fresh analysis of the previous version, so
    findings nested inside an argument that was already rewritten are
    suppressed instead of conflicting. The loop is bounded by the initial
    finding count.
    """
    findings = analyze_document(document, cancellation=cancellation)
    budget = len(findings) + 1
    current = document
    applied = 0
    while findings and applied < budget:
        current = compute_fix(current, findings[0], cancellation=cancellation)
        applied += 1
        findings = analyze_document(current, cancellation=cancellation)

    if findings:
        logger.debug(
            "%s: %d finding(s) left after %d fix(es)", document.path, len(findings), applied
        )
    return FixResult(original=document, fixed=current, applied=applied, remaining=len(findings))


def load_document(file_path: Path, display_path: str | None = None) -> Document | None:
    """Read a source file, or return None when it cannot be decoded."""
    try:
        return Document.from_file(file_path, display_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("skipping unreadable file %s: %s", file_path, exc)
        return None


def write_document(file_path: Path, document: Document) -> None:
    # newline="" keeps the document's own line endings.
    encoding = "utf-8-sig" if document.byte_order_mark else "utf-8"
    with file_path.open("w", encoding=encoding, newline="") as handle:
        handle.write(document.text)


__all__ = ["FixResult", "fix_all", "load_document", "write_document"]
