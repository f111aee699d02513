"""Syntactic pre-filter: find calls that pass an interpolated string directly."""

from __future__ import annotations

from typing import TYPE_CHECKING

from syntax.nodes import DECLARATION_KINDS, SyntaxKind
from syntax.queries import argument_nodes, is_interpolated_string

if TYPE_CHECKING:
    from collections.abc import Iterator

    from syntax.nodes import SyntaxNode


def method_bodies(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield method, constructor and local function declarations.

    A local function is part of its enclosing method's body, so declarations
    nested in one already yielded are not yielded again.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if node is not root and node.kind in DECLARATION_KINDS:
            yield node
            continue
        stack.extend(reversed(node.child_nodes()))


def call_expressions(body: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield every invocation in the body, in source order."""
    for node in body.descendant_nodes():
        if node.kind is SyntaxKind.INVOCATION:
            yield node


def candidate_positions(invocation: SyntaxNode) -> tuple[int, ...]:
    """Positions of arguments whose immediate child is an interpolated string.

    Deeper nesting (``$"a" + b``, ``($"a")``) is not a candidate.
    """
    return tuple(
        position
        for position, argument in enumerate(argument_nodes(invocation))
        if any(is_interpolated_string(child) for child in argument.children)
    )


__all__ = ["call_expressions", "candidate_positions", "method_bodies"]
