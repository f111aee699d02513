"""Tree-sitter based conversion of C# source into the analyzer's syntax tree."""

from __future__ import annotations

import logging

from tree_sitter import Language, Node, Parser
from tree_sitter_c_sharp import language as get_csharp_language

from syntax.nodes import (
    Location,
    SyntaxElement,
    SyntaxKind,
    SyntaxNode,
    SyntaxToken,
    TokenKind,
)

logger = logging.getLogger(__name__)

_PARSER: Parser | None = None

_NODE_KINDS: dict[str, SyntaxKind] = {
    "compilation_unit": SyntaxKind.COMPILATION_UNIT,
    "namespace_declaration": SyntaxKind.NAMESPACE_DECLARATION,
    "file_scoped_namespace_declaration": SyntaxKind.NAMESPACE_DECLARATION,
    "class_declaration": SyntaxKind.TYPE_DECLARATION,
    "struct_declaration": SyntaxKind.TYPE_DECLARATION,
    "record_declaration": SyntaxKind.TYPE_DECLARATION,
    "record_struct_declaration": SyntaxKind.TYPE_DECLARATION,
    "interface_declaration": SyntaxKind.TYPE_DECLARATION,
    "method_declaration": SyntaxKind.METHOD_DECLARATION,
    "constructor_declaration": SyntaxKind.CONSTRUCTOR_DECLARATION,
    "local_function_statement": SyntaxKind.LOCAL_FUNCTION,
    "parameter_list": SyntaxKind.PARAMETER_LIST,
    "parameter": SyntaxKind.PARAMETER,
    "parameter_array": SyntaxKind.PARAMETER_ARRAY,
    "attribute_list": SyntaxKind.ATTRIBUTE_LIST,
    "modifier": SyntaxKind.MODIFIER,
    "parameter_modifier": SyntaxKind.MODIFIER,
    "equals_value_clause": SyntaxKind.EQUALS_VALUE_CLAUSE,
    "invocation_expression": SyntaxKind.INVOCATION,
    "argument_list": SyntaxKind.ARGUMENT_LIST,
    "argument": SyntaxKind.ARGUMENT,
    "name_colon": SyntaxKind.NAME_COLON,
    "interpolated_string_expression": SyntaxKind.INTERPOLATED_STRING,
    "interpolated_verbatim_string_expression": SyntaxKind.INTERPOLATED_STRING,
    "interpolated_raw_string_expression": SyntaxKind.INTERPOLATED_STRING,
    "cast_expression": SyntaxKind.CAST_EXPRESSION,
    "parenthesized_expression": SyntaxKind.PARENTHESIZED_EXPRESSION,
    "member_access_expression": SyntaxKind.MEMBER_ACCESS,
    "element_access_expression": SyntaxKind.ELEMENT_ACCESS,
    "conditional_access_expression": SyntaxKind.CONDITIONAL_ACCESS,
    "postfix_unary_expression": SyntaxKind.POSTFIX_UNARY,
    "generic_name": SyntaxKind.GENERIC_NAME,
}

# Named leaves that spell a type keyword rather than a value.
_KEYWORD_LEAVES = frozenset({"predefined_type", "implicit_type", "this", "base"})


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with the C# language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_csharp_language())
        _PARSER = Parser(lang)

    return _PARSER


def _token_kind(node: Node) -> TokenKind:
    if node.type == "identifier":
        return TokenKind.IDENTIFIER
    if node.type == "comment":
        return TokenKind.COMMENT
    if node.type in _KEYWORD_LEAVES:
        return TokenKind.KEYWORD
    if not node.is_named:
        return TokenKind.KEYWORD if node.type[:1].isalpha() else TokenKind.PUNCTUATION
    return TokenKind.LITERAL


class _TreeBuilder:
    """Walks a tree-sitter tree once, handing out trivia between leaves."""

    def __init__(self, source_bytes: bytes) -> None:
        self._source = source_bytes
        self.cursor = 0

    def _column(self, byte_offset: int, byte_column: int) -> int:
        line_start = byte_offset - byte_column
        return len(self._source[line_start:byte_offset].decode("utf8")) + 1

    def _location(self, start_byte: int, end_byte: int, node: Node) -> Location:
        start_row, start_column = node.start_point
        end_row, end_column = node.end_point
        return Location(
            start_byte=start_byte,
            end_byte=end_byte,
            start_line=start_row + 1,
            start_col=self._column(node.start_byte, start_column),
            end_line=end_row + 1,
            end_col=self._column(node.end_byte, end_column),
        )

    def token(self, node: Node) -> SyntaxToken:
        start = max(node.start_byte, self.cursor)
        end = max(node.end_byte, start)
        trivia = self._source[self.cursor : start].decode("utf8")
        text = self._source[start:end].decode("utf8")
        self.cursor = end
        return SyntaxToken(
            kind=_token_kind(node),
            text=text,
            leading_trivia=trivia,
            location=self._location(start, end, node),
        )

    def end_of_file(self) -> SyntaxToken:
        trivia = self._source[self.cursor :].decode("utf8")
        self.cursor = len(self._source)
        return SyntaxToken(kind=TokenKind.END_OF_FILE, text="", leading_trivia=trivia)

    def convert(self, node: Node) -> SyntaxElement:
        kind = _NODE_KINDS.get(node.type)
        if node.child_count == 0:
            leaf = self.token(node)
            if kind is None:
                return leaf
            return SyntaxNode(
                kind=kind, children=(leaf,), grammar_type=node.type, location=leaf.location
            )

        children = [self.convert(child) for child in node.children]
        if kind is SyntaxKind.ARGUMENT:
            children = _group_name_colon(children)
        return SyntaxNode(
            kind=kind or SyntaxKind.OTHER,
            children=tuple(children),
            grammar_type=node.type,
            location=_span_of(children),
        )


def _span_of(children: list[SyntaxElement]) -> Location | None:
    located = [child.location for child in children if child.location is not None]
    if not located:
        return None
    return Location.spanning(located[0], located[-1])


def _is_colon(element: SyntaxElement) -> bool:
    return isinstance(element, SyntaxToken) and element.text == ":"


def _group_name_colon(children: list[SyntaxElement]) -> list[SyntaxElement]:
    """Wrap a leading ``name :`` pair of an argument in a NAME_COLON node."""
    if len(children) < 3:
        return children
    name, colon = children[0], children[1]
    if not (
        isinstance(name, SyntaxToken)
        and name.kind is TokenKind.IDENTIFIER
        and _is_colon(colon)
    ):
        return children
    name_colon = SyntaxNode(
        kind=SyntaxKind.NAME_COLON,
        children=(name, colon),
        grammar_type="name_colon",
        location=_span_of([name, colon]),
    )
    return [name_colon, *children[2:]]


def parse_source(text: str) -> SyntaxNode:
    """Parse C# source text into a full-fidelity syntax tree.

    The returned compilation unit renders back to exactly ``text``. Syntax
    errors do not raise; tree-sitter recovers and the damaged region ends up
    in OTHER nodes.
    """
    source_bytes = text.encode("utf8")
    tree = _get_parser().parse(source_bytes)
    if tree.root_node.has_error:
        logger.debug("source contains syntax errors; analyzing recovered tree")

    builder = _TreeBuilder(source_bytes)
    converted = builder.convert(tree.root_node)
    if isinstance(converted, SyntaxToken):
        converted = SyntaxNode(
            kind=SyntaxKind.COMPILATION_UNIT,
            children=(converted,),
            grammar_type=tree.root_node.type,
        )
    return converted.with_children((*converted.children, builder.end_of_file()))


__all__ = ["parse_source"]
