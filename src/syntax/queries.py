"""Read-only helpers for picking C# constructs out of a syntax tree."""

from __future__ import annotations

from dataclasses import dataclass, field

from syntax.nodes import (
    SyntaxElement,
    SyntaxKind,
    SyntaxNode,
    SyntaxToken,
    TokenKind,
    element_text,
)


@dataclass(frozen=True)
class Argument:
    """One argument of a call, positional or named."""

    position: int
    name: str | None
    node: SyntaxNode | None = field(default=None, compare=False)

    @property
    def is_named(self) -> bool:
        return self.name is not None


def normalize_identifier(text: str) -> str:
    """Drop the verbatim ``@`` prefix so ``@object`` and ``object`` match."""
    return text.strip().removeprefix("@")


def argument_list(invocation: SyntaxNode) -> SyntaxNode | None:
    for child in invocation.child_nodes():
        if child.kind is SyntaxKind.ARGUMENT_LIST:
            return child
    return None


def argument_nodes(invocation: SyntaxNode) -> tuple[SyntaxNode, ...]:
    arguments = argument_list(invocation)
    if arguments is None:
        return ()
    return tuple(
        child for child in arguments.child_nodes() if child.kind is SyntaxKind.ARGUMENT
    )


def argument_name(argument: SyntaxNode) -> str | None:
    """Return the explicit parameter name of ``name: value``, if any."""
    for child in argument.child_nodes():
        if child.kind is SyntaxKind.NAME_COLON:
            name = normalize_identifier(child.to_text().replace(":", ""))
            return name or None
    return None


def call_arguments(invocation: SyntaxNode) -> tuple[Argument, ...]:
    return tuple(
        Argument(position=position, name=argument_name(node), node=node)
        for position, node in enumerate(argument_nodes(invocation))
    )


def declared_name(declaration: SyntaxNode) -> str | None:
    """Return the simple name of a type, method or local function declaration."""
    if declaration.kind in (SyntaxKind.TYPE_DECLARATION, SyntaxKind.NAMESPACE_DECLARATION):
        for token in declaration.child_tokens():
            if token.kind is TokenKind.IDENTIFIER:
                return normalize_identifier(token.text)
        return None

    parameters = parameter_list(declaration)
    if parameters is None:
        return None
    index = declaration.children.index(parameters)
    for child in reversed(declaration.children[:index]):
        if isinstance(child, SyntaxToken) and child.kind is TokenKind.IDENTIFIER:
            return normalize_identifier(child.text)
        if isinstance(child, SyntaxNode) and child.grammar_type == "type_parameter_list":
            continue
        return None
    return None


def parameter_list(declaration: SyntaxNode) -> SyntaxNode | None:
    for child in declaration.child_nodes():
        if child.kind is SyntaxKind.PARAMETER_LIST:
            return child
    return None


def parameter_groups(parameters: SyntaxNode) -> list[list[SyntaxElement]]:
    """Split a parameter list into the elements of each formal parameter.

    Grammar versions differ in whether a ``params`` parameter is its own node
    or a run of loose children, so grouping goes by the separating commas.
    """
    groups: list[list[SyntaxElement]] = [[]]
    for child in parameters.children:
        if isinstance(child, SyntaxToken):
            if child.text in ("(", ")") or child.kind is TokenKind.COMMENT:
                continue
            if child.text == ",":
                groups.append([])
                continue
        groups[-1].append(child)
    return [group for group in groups if group]


def is_interpolated_string(element: SyntaxElement) -> bool:
    return isinstance(element, SyntaxNode) and element.kind is SyntaxKind.INTERPOLATED_STRING


def text_of(element: SyntaxElement) -> str:
    return element_text(element).strip()


__all__ = [
    "Argument",
    "argument_list",
    "argument_name",
    "argument_nodes",
    "call_arguments",
    "declared_name",
    "is_interpolated_string",
    "normalize_identifier",
    "parameter_groups",
    "parameter_list",
    "text_of",
]
