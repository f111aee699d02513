"""Immutable syntax tree used by the analyzer and the rewrite engine.

The tree is a tagged variant: every interior node carries a ``SyntaxKind``
and every leaf is a ``SyntaxToken`` tagged with a ``TokenKind``. Tokens keep
the exact trivia (whitespace and anything else the grammar skipped) that
preceded them, so rendering a converted tree reproduces its source text
byte for byte.

Nodes compare and hash by identity. Edits never mutate a tree; they return
a new root that shares every untouched subtree with the old one.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterator


class SyntaxKind(str, Enum):
    """Node kinds the analyzer distinguishes."""

    COMPILATION_UNIT = "compilation_unit"
    NAMESPACE_DECLARATION = "namespace_declaration"
    TYPE_DECLARATION = "type_declaration"
    METHOD_DECLARATION = "method_declaration"
    CONSTRUCTOR_DECLARATION = "constructor_declaration"
    LOCAL_FUNCTION = "local_function"
    PARAMETER_LIST = "parameter_list"
    PARAMETER = "parameter"
    PARAMETER_ARRAY = "parameter_array"
    ATTRIBUTE_LIST = "attribute_list"
    MODIFIER = "modifier"
    EQUALS_VALUE_CLAUSE = "equals_value_clause"
    INVOCATION = "invocation"
    ARGUMENT_LIST = "argument_list"
    ARGUMENT = "argument"
    NAME_COLON = "name_colon"
    INTERPOLATED_STRING = "interpolated_string"
    CAST_EXPRESSION = "cast_expression"
    PARENTHESIZED_EXPRESSION = "parenthesized_expression"
    MEMBER_ACCESS = "member_access"
    ELEMENT_ACCESS = "element_access"
    CONDITIONAL_ACCESS = "conditional_access"
    POSTFIX_UNARY = "postfix_unary"
    GENERIC_NAME = "generic_name"
    OTHER = "other"


class TokenKind(str, Enum):
    """Leaf kinds."""

    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    PUNCTUATION = "punctuation"
    LITERAL = "literal"
    COMMENT = "comment"
    END_OF_FILE = "end_of_file"


DECLARATION_KINDS = frozenset(
    {
        SyntaxKind.METHOD_DECLARATION,
        SyntaxKind.CONSTRUCTOR_DECLARATION,
        SyntaxKind.LOCAL_FUNCTION,
    }
)


class EditConflictError(Exception):
    """Raised when an edit targets a node that is not part of the tree."""


@dataclass(frozen=True)
class Location:
    """Source range of a node or token.

    Byte offsets are 0-based and end-exclusive. Lines and columns are
    1-based; columns count characters, not bytes.
    """

    start_byte: int
    end_byte: int
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @classmethod
    def spanning(cls, first: Location, last: Location) -> Location:
        return cls(
            start_byte=first.start_byte,
            end_byte=last.end_byte,
            start_line=first.start_line,
            start_col=first.start_col,
            end_line=last.end_line,
            end_col=last.end_col,
        )


@dataclass(frozen=True, eq=False)
class SyntaxToken:
    """A leaf of the tree."""

    kind: TokenKind
    text: str
    leading_trivia: str = ""
    location: Location | None = None

    def to_full_string(self) -> str:
        return self.leading_trivia + self.text

    def with_leading_trivia(self, trivia: str) -> SyntaxToken:
        return dataclasses.replace(self, leading_trivia=trivia)


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    """An interior node of the tree."""

    kind: SyntaxKind
    children: tuple[SyntaxElement, ...] = ()
    grammar_type: str = ""
    location: Location | None = None

    def child_nodes(self) -> tuple[SyntaxNode, ...]:
        return tuple(child for child in self.children if isinstance(child, SyntaxNode))

    def child_tokens(self) -> tuple[SyntaxToken, ...]:
        return tuple(child for child in self.children if isinstance(child, SyntaxToken))

    def descendant_nodes(self) -> Iterator[SyntaxNode]:
        """Yield every node below this one in pre-order (source order)."""
        stack = list(reversed(self.child_nodes()))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.child_nodes()))

    def descendant_tokens(self) -> Iterator[SyntaxToken]:
        """Yield every token below this one in source order."""
        stack: list[SyntaxElement] = list(reversed(self.children))
        while stack:
            element = stack.pop()
            if isinstance(element, SyntaxToken):
                yield element
            else:
                stack.extend(reversed(element.children))

    def first_token(self) -> SyntaxToken | None:
        return next(self.descendant_tokens(), None)

    def contains(self, target: SyntaxNode) -> bool:
        return target is self or any(node is target for node in self.descendant_nodes())

    def to_full_string(self) -> str:
        return "".join(token.to_full_string() for token in self.descendant_tokens())

    def to_text(self) -> str:
        """Render without the trivia in front of the first token."""
        return self.to_full_string()[len(leading_trivia(self)) :]

    def with_children(self, children: tuple[SyntaxElement, ...]) -> SyntaxNode:
        # The old location no longer describes the new text.
        return dataclasses.replace(self, children=children, location=None)

    def with_leading_trivia(self, trivia: str) -> SyntaxNode:
        for index, child in enumerate(self.children):
            if isinstance(child, SyntaxToken):
                new_child: SyntaxElement = child.with_leading_trivia(trivia)
            elif child.first_token() is not None:
                new_child = child.with_leading_trivia(trivia)
            else:
                continue
            children = (*self.children[:index], new_child, *self.children[index + 1 :])
            return dataclasses.replace(self, children=children)
        return self


SyntaxElement = Union[SyntaxNode, SyntaxToken]


def leading_trivia(element: SyntaxElement) -> str:
    if isinstance(element, SyntaxToken):
        return element.leading_trivia
    token = element.first_token()
    return token.leading_trivia if token is not None else ""


def element_text(element: SyntaxElement) -> str:
    if isinstance(element, SyntaxToken):
        return element.text
    return element.to_text()


def _path_to(root: SyntaxNode, target: SyntaxNode) -> list[tuple[SyntaxNode, int]] | None:
    """Return the (parent, child index) chain from root down to target."""
    stack: list[tuple[SyntaxNode, list[tuple[SyntaxNode, int]]]] = [(root, [])]
    while stack:
        node, path = stack.pop()
        for index, child in enumerate(node.children):
            if child is target:
                return [*path, (node, index)]
            if isinstance(child, SyntaxNode):
                stack.append((child, [*path, (node, index)]))
    return None


def replace_node(root: SyntaxNode, old: SyntaxNode, new: SyntaxNode) -> SyntaxNode:
    """Return a copy of root with old swapped for new.

    Only the ancestors of old are rebuilt. Raises EditConflictError when old
    is not part of root.
    """
    if old is root:
        return new

    path = _path_to(root, old)
    if path is None:
        msg = f"node {old.kind.value} is not part of the tree being edited"
        raise EditConflictError(msg)

    replacement: SyntaxNode = new
    for parent, index in reversed(path):
        children = (*parent.children[:index], replacement, *parent.children[index + 1 :])
        replacement = parent.with_children(children)
    return replacement


__all__ = [
    "DECLARATION_KINDS",
    "EditConflictError",
    "Location",
    "SyntaxElement",
    "SyntaxKind",
    "SyntaxNode",
    "SyntaxToken",
    "TokenKind",
    "element_text",
    "leading_trivia",
    "replace_node",
]
