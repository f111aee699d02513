"""Constructors for synthesized syntax."""

from __future__ import annotations

from syntax.nodes import (
    SyntaxElement,
    SyntaxKind,
    SyntaxNode,
    SyntaxToken,
    TokenKind,
    leading_trivia,
)


def identifier_token(name: str, trivia: str = "") -> SyntaxToken:
    return SyntaxToken(kind=TokenKind.IDENTIFIER, text=name, leading_trivia=trivia)


def punctuation_token(text: str, trivia: str = "") -> SyntaxToken:
    return SyntaxToken(kind=TokenKind.PUNCTUATION, text=text, leading_trivia=trivia)


def _strip_leading_trivia(element: SyntaxElement) -> SyntaxElement:
    return element.with_leading_trivia("")


def cast_expression(type_name: str, expression: SyntaxElement) -> SyntaxNode:
    """Build ``(type_name)expression``.

    The trivia in front of the expression moves in front of the opening
    parenthesis, so the cast takes the expression's place in the text.
    """
    return SyntaxNode(
        kind=SyntaxKind.CAST_EXPRESSION,
        grammar_type="cast_expression",
        children=(
            punctuation_token("(", leading_trivia(expression)),
            identifier_token(type_name),
            punctuation_token(")"),
            _strip_leading_trivia(expression),
        ),
    )


def parenthesized_expression(expression: SyntaxElement) -> SyntaxNode:
    """Build ``(expression)``, moving the leading trivia outside."""
    return SyntaxNode(
        kind=SyntaxKind.PARENTHESIZED_EXPRESSION,
        grammar_type="parenthesized_expression",
        children=(
            punctuation_token("(", leading_trivia(expression)),
            _strip_leading_trivia(expression),
            punctuation_token(")"),
        ),
    )


__all__ = [
    "cast_expression",
    "identifier_token",
    "parenthesized_expression",
    "punctuation_token",
]
