"""Per-file declaration table that resolves call sites to method symbols.

This is the semantic model the analyzer consumes. It knows about the types
and methods declared in one compilation unit and resolves:

* bare calls ``Foo(...)`` against the enclosing type and its outer types,
* ``this.Foo(...)`` against the enclosing type,
* ``TypeName.Foo(...)`` against a type declared in the same file.

Overloads are filtered by arity and argument names. Anything it cannot pin
to exactly one method (external APIs, ``dynamic`` receivers, extension
methods, ambiguous overloads) resolves to ``None``.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from syntax.nodes import SyntaxKind, SyntaxNode, SyntaxToken, TokenKind
from syntax.queries import (
    Argument,
    call_arguments,
    declared_name,
    normalize_identifier,
    parameter_groups,
    parameter_list,
    text_of,
)

if TYPE_CHECKING:
    from syntax.nodes import SyntaxElement

logger = logging.getLogger(__name__)

TypeScope = tuple[str, ...]

_PARAMETER_MODIFIERS = frozenset({"params", "ref", "out", "in", "this", "scoped", "readonly"})
_CALLABLE_KINDS = frozenset({SyntaxKind.METHOD_DECLARATION, SyntaxKind.LOCAL_FUNCTION})


@dataclass(frozen=True)
class TypeRef:
    """A declared type, reduced to what the analyzer needs to compare."""

    namespace: str
    name: str
    element_type: TypeRef | None = None

    @property
    def is_array(self) -> bool:
        return self.element_type is not None

    @property
    def is_universal_object(self) -> bool:
        return self == OBJECT_TYPE

    def display(self) -> str:
        if self.element_type is not None:
            return f"{self.element_type.display()}[]"
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


OBJECT_TYPE = TypeRef(namespace="System", name="Object")
UNKNOWN_TYPE = TypeRef(namespace="", name="")

_OBJECT_SPELLINGS = frozenset({"object", "System.Object", "global::System.Object"})


def parse_type_ref(text: str, local_type_names: frozenset[str] = frozenset()) -> TypeRef:
    """Interpret a type as written in a declaration.

    ``Object`` only denotes ``System.Object`` when the file does not declare
    a type of that name itself.
    """
    compact = "".join(text.split()).removesuffix("?")
    if compact.endswith("]") and "[" in compact:
        element = compact[: compact.rindex("[")]
        return TypeRef(
            namespace="System",
            name="Array",
            element_type=parse_type_ref(element, local_type_names),
        )

    if compact in _OBJECT_SPELLINGS:
        return OBJECT_TYPE
    if compact == "Object" and "Object" not in local_type_names:
        return OBJECT_TYPE

    compact = compact.removeprefix("global::")
    namespace, _, name = compact.rpartition(".")
    return TypeRef(namespace=namespace, name=name)


@dataclass(frozen=True)
class ParameterSymbol:
    """A formal parameter of a resolved method."""

    name: str
    type: TypeRef
    ordinal: int
    is_params: bool = False
    has_default: bool = False


@dataclass(frozen=True)
class MethodSymbol:
    """A resolved callee with its ordered parameters."""

    name: str
    containing_type: str
    parameters: tuple[ParameterSymbol, ...]

    @property
    def is_variadic(self) -> bool:
        return bool(self.parameters) and self.parameters[-1].is_params


class SemanticModel(Protocol):
    """What the analyzer needs from a semantic model."""

    def resolve_callee(self, invocation: SyntaxNode) -> MethodSymbol | None: ...


def _is_modifier(element: SyntaxElement) -> bool:
    if isinstance(element, SyntaxToken):
        return element.kind is TokenKind.KEYWORD and element.text in _PARAMETER_MODIFIERS
    return element.kind is SyntaxKind.MODIFIER


def _parameter_symbol(
    group: list[SyntaxElement],
    ordinal: int,
    local_type_names: frozenset[str],
) -> ParameterSymbol | None:
    items = group
    is_params = False
    if len(group) == 1 and isinstance(group[0], SyntaxNode):
        only = group[0]
        if only.kind in (SyntaxKind.PARAMETER, SyntaxKind.PARAMETER_ARRAY):
            is_params = only.kind is SyntaxKind.PARAMETER_ARRAY
            items = list(only.children)

    head: list[SyntaxElement] = []
    has_default = False
    for item in items:
        if isinstance(item, SyntaxToken) and item.text == "=":
            has_default = True
            break
        if isinstance(item, SyntaxNode) and item.kind is SyntaxKind.EQUALS_VALUE_CLAUSE:
            has_default = True
            break
        if isinstance(item, SyntaxToken) and item.kind is TokenKind.COMMENT:
            continue
        if isinstance(item, SyntaxNode) and item.kind is SyntaxKind.ATTRIBUTE_LIST:
            continue
        if _is_modifier(item):
            is_params = is_params or text_of(item) == "params"
            continue
        head.append(item)

    if not head:
        return None
    name = head[-1]
    if not (isinstance(name, SyntaxToken) and name.kind is TokenKind.IDENTIFIER):
        return None
    declared_type = (
        parse_type_ref(text_of(head[-2]), local_type_names) if len(head) >= 2 else UNKNOWN_TYPE
    )
    return ParameterSymbol(
        name=normalize_identifier(name.text),
        type=declared_type,
        ordinal=ordinal,
        is_params=is_params,
        has_default=has_default,
    )


def build_method_symbol(
    declaration: SyntaxNode,
    containing_type: str = "",
    local_type_names: frozenset[str] = frozenset(),
) -> MethodSymbol | None:
    """Read a method or local function declaration into a MethodSymbol."""
    name = declared_name(declaration)
    parameters_node = parameter_list(declaration)
    if name is None or parameters_node is None:
        return None

    parameters: list[ParameterSymbol] = []
    for ordinal, group in enumerate(parameter_groups(parameters_node)):
        parameter = _parameter_symbol(group, ordinal, local_type_names)
        if parameter is None:
            return None
        parameters.append(parameter)

    return MethodSymbol(name=name, containing_type=containing_type, parameters=tuple(parameters))


def _is_applicable(method: MethodSymbol, arguments: tuple[Argument, ...]) -> bool:
    """Arity and name check used to pick among same-named overloads."""
    names = {parameter.name for parameter in method.parameters}
    named = {argument.name for argument in arguments if argument.name is not None}
    if not named <= names:
        return False

    positional = sum(1 for argument in arguments if argument.name is None)
    if not method.is_variadic and positional > len(method.parameters):
        return False

    for parameter in method.parameters:
        if parameter.has_default or parameter.is_params:
            continue
        if parameter.ordinal < positional or parameter.name in named:
            continue
        return False
    return True


class FileSemanticModel:
    """Semantic model over the declarations of a single compilation unit."""

    def __init__(self, root: SyntaxNode) -> None:
        self._methods: dict[TypeScope, list[MethodSymbol]] = defaultdict(list)
        self._scopes_by_name: dict[str, list[TypeScope]] = defaultdict(list)
        self._enclosing: dict[SyntaxNode, TypeScope] = {}
        self._local_type_names = frozenset(
            name
            for node in root.descendant_nodes()
            if node.kind is SyntaxKind.TYPE_DECLARATION
            for name in [declared_name(node)]
            if name is not None
        )
        self._collect(root)

    @property
    def local_type_names(self) -> frozenset[str]:
        return self._local_type_names

    def _collect(self, root: SyntaxNode) -> None:
        stack: list[tuple[SyntaxNode, TypeScope]] = [(root, ())]
        while stack:
            node, scope = stack.pop()
            if node.kind is SyntaxKind.TYPE_DECLARATION:
                name = declared_name(node) or "<anonymous>"
                scope = (*scope, name)
                self._scopes_by_name[name].append(scope)
            elif node.kind in _CALLABLE_KINDS:
                symbol = build_method_symbol(node, ".".join(scope), self._local_type_names)
                if symbol is not None:
                    self._methods[scope].append(symbol)
            elif node.kind is SyntaxKind.INVOCATION:
                self._enclosing[node] = scope
            stack.extend((child, scope) for child in reversed(node.child_nodes()))

    def methods_in(self, scope: TypeScope) -> tuple[MethodSymbol, ...]:
        return tuple(self._methods.get(scope, ()))

    def _callee_name(self, element: SyntaxElement) -> str | None:
        if isinstance(element, SyntaxToken):
            if element.kind is not TokenKind.IDENTIFIER:
                return None
            return normalize_identifier(element.text)
        if element.kind is SyntaxKind.GENERIC_NAME:
            token = element.first_token()
            return normalize_identifier(token.text) if token is not None else None
        return None

    def _lookup_scopes(
        self, function: SyntaxElement, scope: TypeScope
    ) -> tuple[str | None, list[TypeScope]]:
        if isinstance(function, SyntaxNode) and function.kind is SyntaxKind.MEMBER_ACCESS:
            receiver, member = function.children[0], function.children[-1]
            name = self._callee_name(member)
            receiver_text = text_of(receiver)
            if receiver_text == "this":
                return name, [scope]
            path = tuple(
                normalize_identifier(part)
                for part in "".join(receiver_text.split()).removeprefix("global::").split(".")
            )
            # A dotted receiver must spell the full nesting of a declared type.
            candidates = [
                candidate
                for candidate in self._scopes_by_name.get(path[-1], [])
                if candidate[-len(path) :] == path
            ]
            if len(candidates) == 1:
                return name, list(candidates)
            return None, []

        name = self._callee_name(function)
        # Innermost type first, like C# member lookup.
        chain = [scope[:depth] for depth in range(len(scope), 0, -1)]
        for candidate_scope in chain:
            if any(method.name == name for method in self._methods.get(candidate_scope, ())):
                return name, [candidate_scope]
        return name, []

    def resolve_callee(self, invocation: SyntaxNode) -> MethodSymbol | None:
        scope = self._enclosing.get(invocation)
        if scope is None or not invocation.children:
            return None

        name, scopes = self._lookup_scopes(invocation.children[0], scope)
        if name is None:
            return None

        arguments = call_arguments(invocation)
        overloads = [
            method
            for candidate_scope in scopes
            for method in self._methods.get(candidate_scope, ())
            if method.name == name
        ]
        applicable = [method for method in overloads if _is_applicable(method, arguments)]
        if len(applicable) != 1:
            logger.debug(
                "callee %s not resolved: %d overload(s), %d applicable",
                name,
                len(overloads),
                len(applicable),
            )
            return None
        return applicable[0]


__all__ = [
    "OBJECT_TYPE",
    "FileSemanticModel",
    "MethodSymbol",
    "ParameterSymbol",
    "SemanticModel",
    "TypeRef",
    "build_method_symbol",
    "parse_type_ref",
]
