"""Turns confirmed arguments into findings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contract.diagnostics import PRESERVE_FORMATTABLE_STRING

if TYPE_CHECKING:
    from contract.diagnostics import DiagnosticDescriptor, Severity
    from syntax.nodes import Location, SyntaxNode


@dataclass(frozen=True)
class Finding:
    """One flagged argument. The argument node is what a fix rewrites."""

    rule_id: str
    message: str
    severity: Severity
    path: str
    location: Location | None
    argument: SyntaxNode = field(compare=False, repr=False)

    def format(self) -> str:
        """Render as ``path:line:col: severity id: message``."""
        where = self.path
        if self.location is not None:
            where = f"{self.path}:{self.location.start_line}:{self.location.start_col}"
        return f"{where}: {self.severity} {self.rule_id}: {self.message}"


def create_finding(
    argument: SyntaxNode,
    path: str = "",
    descriptor: DiagnosticDescriptor = PRESERVE_FORMATTABLE_STRING,
) -> Finding:
    return Finding(
        rule_id=descriptor.id,
        message=descriptor.message_format,
        severity=descriptor.severity,
        path=path,
        location=argument.location,
        argument=argument,
    )


__all__ = ["Finding", "create_finding"]
