"""Rule definitions for formattable-lint."""

from rules.analyzer import analyze_document, analyze_root
from rules.binding import BindingError
from rules.cancellation import CancellationToken, OperationCanceledError
from rules.config import (
    ConfigError,
    LintConfig,
    load_config,
)
from rules.emitter import Finding

__all__ = [
    "BindingError",
    "CancellationToken",
    "ConfigError",
    "Finding",
    "LintConfig",
    "OperationCanceledError",
    "analyze_document",
    "analyze_root",
    "load_config",
]
