"""Argument-to-parameter binding for resolved calls.

Each argument binds on its own:

1. a named argument binds to the one parameter with that name;
2. otherwise, when the last parameter is ``params`` and the argument sits at
   or after its ordinal, it binds to that parameter;
3. otherwise it binds to the parameter with the same ordinal.

A binding that cannot be made raises BindingError, and the caller skips the
whole call rather than guessing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from parse.name_resolution import MethodSymbol, ParameterSymbol, TypeRef
    from syntax.queries import Argument


class BindingError(Exception):
    """Raised when an argument does not map to exactly one parameter."""


def bind_argument(argument: Argument, method: MethodSymbol) -> ParameterSymbol:
    parameters = method.parameters

    if argument.name is not None:
        matches = [parameter for parameter in parameters if parameter.name == argument.name]
        if len(matches) != 1:
            msg = (
                f"argument {argument.position} names '{argument.name}', which matches "
                f"{len(matches)} parameter(s) of {method.name}"
            )
            raise BindingError(msg)
        return matches[0]

    if method.is_variadic and argument.position >= parameters[-1].ordinal:
        return parameters[-1]

    if argument.position >= len(parameters):
        msg = (
            f"argument {argument.position} has no parameter in {method.name}, "
            f"which takes {len(parameters)}"
        )
        raise BindingError(msg)
    return parameters[argument.position]


def bind_arguments(
    arguments: Sequence[Argument], method: MethodSymbol
) -> tuple[ParameterSymbol, ...]:
    """Bind every argument of a call, in argument order."""
    return tuple(bind_argument(argument, method) for argument in arguments)


def effective_type(parameter: ParameterSymbol) -> TypeRef:
    """The type a single argument converts to.

    Arguments bound to a ``params`` parameter convert to its element type.
    """
    if parameter.is_params and parameter.type.element_type is not None:
        return parameter.type.element_type
    return parameter.type


def is_object_bound(parameter: ParameterSymbol) -> bool:
    return effective_type(parameter).is_universal_object


def object_bound_positions(
    arguments: Sequence[Argument],
    positions: Iterable[int],
    method: MethodSymbol,
) -> tuple[int, ...]:
    """Filter candidate positions down to those bound to ``object``.

    All arguments are bound, not just the candidates, so a call with any
    unbindable argument raises BindingError as a whole.
    """
    bound = bind_arguments(arguments, method)
    return tuple(position for position in positions if is_object_bound(bound[position]))


__all__ = [
    "BindingError",
    "bind_argument",
    "bind_arguments",
    "effective_type",
    "is_object_bound",
    "object_bound_positions",
]
