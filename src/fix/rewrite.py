"""Code fix: cast interpolated strings in a flagged argument to FormattableString."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.diagnostics import FORMATTABLE_STRING_TYPE_NAME
from rules.cancellation import check_cancellation
from syntax.factory import cast_expression, parenthesized_expression
from syntax.nodes import SyntaxKind, SyntaxNode, replace_node

if TYPE_CHECKING:
    from fix.document import Document
    from rules.cancellation import CancellationToken
    from rules.emitter import Finding
    from syntax.nodes import SyntaxElement

# Parents in which the first child is an operand of a postfix operation. A
# cast there would swallow the whole operation, so the cast gets parentheses.
_RECEIVER_KINDS = frozenset(
    {
        SyntaxKind.MEMBER_ACCESS,
        SyntaxKind.ELEMENT_ACCESS,
        SyntaxKind.CONDITIONAL_ACCESS,
        SyntaxKind.POSTFIX_UNARY,
        SyntaxKind.INVOCATION,
    }
)


def interpolated_strings(argument: SyntaxNode) -> list[SyntaxNode]:
    """Every interpolated string under the argument, at any depth."""
    return [
        node
        for node in argument.descendant_nodes()
        if node.kind is SyntaxKind.INTERPOLATED_STRING
    ]


def _is_receiver(parent: SyntaxNode, index: int) -> bool:
    return parent.kind in _RECEIVER_KINDS and index == 0


def _wrap(node: SyntaxNode) -> SyntaxNode:
    changed = False
    children: list[SyntaxElement] = []
    for index, child in enumerate(node.children):
        new_child: SyntaxElement = child
        if isinstance(child, SyntaxNode):
            new_child = _wrap(child)
            if child.kind is SyntaxKind.INTERPOLATED_STRING:
                new_child = cast_expression(FORMATTABLE_STRING_TYPE_NAME, new_child)
                if _is_receiver(node, index):
                    new_child = parenthesized_expression(new_child)
        changed = changed or new_child is not child
        children.append(new_child)
    return node.with_children(tuple(children)) if changed else node


def rewrite_argument(argument: SyntaxNode) -> SyntaxNode:
    """Return the argument with each interpolated string wrapped in a cast.

    Nested interpolated strings are wrapped too, innermost first; everything
    else in the argument is reused unchanged.
    """
    return _wrap(argument)


def compute_fix(
    document: Document,
    finding: Finding,
    *,
    cancellation: CancellationToken | None = None,
) -> Document:
    """Apply the fix for one finding and return the new document version.

    The finding must come from this document version; otherwise its
    argument is not in the tree and EditConflictError is raised.
    """
    root = document.syntax_root()
    check_cancellation(cancellation)
    new_root = replace_node(root, finding.argument, rewrite_argument(finding.argument))
    return document.with_syntax_root(new_root)


__all__ = ["compute_fix", "interpolated_strings", "rewrite_argument"]
