"""Syntax tree model shared by the analyzer and the rewrite engine."""

from syntax.factory import cast_expression, identifier_token, parenthesized_expression
from syntax.nodes import (
    EditConflictError,
    Location,
    SyntaxElement,
    SyntaxKind,
    SyntaxNode,
    SyntaxToken,
    TokenKind,
    replace_node,
)

__all__ = [
    "EditConflictError",
    "Location",
    "SyntaxElement",
    "SyntaxKind",
    "SyntaxNode",
    "SyntaxToken",
    "TokenKind",
    "cast_expression",
    "identifier_token",
    "parenthesized_expression",
    "replace_node",
]
