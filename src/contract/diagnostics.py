"""Diagnostic descriptor surfaced to tooling.

The rule identifier, severity and message are stable identifiers: editors,
CI filters and suppression files key on them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Severity = Literal["error", "warning", "info"]


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Fixed metadata of one analyzer rule."""

    id: str
    title: str
    message_format: str
    category: str
    severity: Severity
    description: str
    enabled_by_default: bool = True


DIAGNOSTIC_ID = "PreserveFormattableStringForObjParams"

FORMATTABLE_STRING_TYPE_NAME = "FormattableString"

PRESERVE_FORMATTABLE_STRING = DiagnosticDescriptor(
    id=DIAGNOSTIC_ID,
    title=(
        'An interpolated string ($"...") is converted to a plain string during '
        "argument passing. This loses the raw data values. Pass it as "
        "FormattableString to preserve them."
    ),
    message_format="Raw data values from interpolated string are lost due to cast to an object.",
    category="FormattableString",
    severity="error",
    description=(
        "An interpolated string is passed to an 'object' parameter, which "
        "formats it into a plain string and loses the raw data values. "
        "Pass it as FormattableString to preserve them."
    ),
)

FIX_TITLE = "Add explicit cast to preserve FormattableString"


__all__ = [
    "DIAGNOSTIC_ID",
    "FIX_TITLE",
    "FORMATTABLE_STRING_TYPE_NAME",
    "PRESERVE_FORMATTABLE_STRING",
    "DiagnosticDescriptor",
    "Severity",
]
