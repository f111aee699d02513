"""Analysis pipeline: scanner, binding, suppression, emitter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from parse.name_resolution import FileSemanticModel
from rules.binding import BindingError, object_bound_positions
from rules.cancellation import check_cancellation
from rules.emitter import Finding, create_finding
from rules.scanner import call_expressions, candidate_positions, method_bodies
from rules.suppression import mentions_formattable_string
from syntax.queries import call_arguments

if TYPE_CHECKING:
    from fix.document import Document
    from parse.name_resolution import SemanticModel
    from rules.cancellation import CancellationToken
    from syntax.nodes import SyntaxNode

logger = logging.getLogger(__name__)


def analyze_call(
    invocation: SyntaxNode,
    semantic_model: SemanticModel,
    *,
    path: str = "",
) -> list[Finding]:
    """Findings for a single call, in argument order."""
    positions = candidate_positions(invocation)
    if not positions:
        return []

    method = semantic_model.resolve_callee(invocation)
    if method is None:
        return []

    arguments = call_arguments(invocation)
    try:
        confirmed = object_bound_positions(arguments, positions, method)
    except BindingError as exc:
        logger.debug("skipping call to %s: %s", method.name, exc)
        return []

    findings: list[Finding] = []
    for position in confirmed:
        argument = arguments[position].node
        if argument is None or mentions_formattable_string(argument):
            continue
        findings.append(create_finding(argument, path))
    return findings


def analyze_method(
    body: SyntaxNode,
    semantic_model: SemanticModel,
    *,
    path: str = "",
    cancellation: CancellationToken | None = None,
) -> list[Finding]:
    """Analyze one method body.

    Cancellation is checked before every call site; when it fires the
    findings gathered so far are dropped with the raised error.
    """
    findings: list[Finding] = []
    for invocation in call_expressions(body):
        check_cancellation(cancellation)
        findings.extend(analyze_call(invocation, semantic_model, path=path))
    return findings


def analyze_root(
    root: SyntaxNode,
    semantic_model: SemanticModel | None = None,
    *,
    path: str = "",
    cancellation: CancellationToken | None = None,
) -> list[Finding]:
    """Analyze every method body under root, in source order."""
    if semantic_model is None:
        semantic_model = FileSemanticModel(root)

    findings: list[Finding] = []
    for body in method_bodies(root):
        findings.extend(
            analyze_method(body, semantic_model, path=path, cancellation=cancellation)
        )
    return findings


def analyze_document(
    document: Document,
    *,
    cancellation: CancellationToken | None = None,
) -> list[Finding]:
    return analyze_root(
        document.syntax_root(),
        document.semantic_model(),
        path=document.path,
        cancellation=cancellation,
    )


__all__ = ["analyze_call", "analyze_document", "analyze_method", "analyze_root"]
