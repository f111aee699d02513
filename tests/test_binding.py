from __future__ import annotations

import pytest

from parse.name_resolution import OBJECT_TYPE, MethodSymbol, ParameterSymbol, TypeRef
from rules.binding import (
    BindingError,
    bind_argument,
    effective_type,
    is_object_bound,
    object_bound_positions,
)
from syntax.queries import Argument

_STRING = TypeRef(namespace="System", name="String")
_OBJECT_ARRAY = TypeRef(namespace="System", name="Array", element_type=OBJECT_TYPE)
_STRING_ARRAY = TypeRef(namespace="System", name="Array", element_type=_STRING)


def _method(*parameters: tuple[str, TypeRef, bool]) -> MethodSymbol:
    return MethodSymbol(
        name="Foo",
        containing_type="TypeName",
        parameters=tuple(
            ParameterSymbol(name=name, type=type_ref, ordinal=ordinal, is_params=is_params)
            for ordinal, (name, type_ref, is_params) in enumerate(parameters)
        ),
    )


def _arguments(*names: str | None) -> tuple[Argument, ...]:
    return tuple(Argument(position=position, name=name) for position, name in enumerate(names))


def test_positional_arguments_bind_by_ordinal() -> None:
    method = _method(("obj", OBJECT_TYPE, False), ("text", _STRING, False))
    arguments = _arguments(None, None)

    assert bind_argument(arguments[0], method).name == "obj"
    assert bind_argument(arguments[1], method).name == "text"


def test_named_argument_binds_by_name() -> None:
    method = _method(("obj", OBJECT_TYPE, False), ("obj2", OBJECT_TYPE, False))
    arguments = _arguments("obj2", "obj")

    assert bind_argument(arguments[0], method).name == "obj2"
    assert bind_argument(arguments[1], method).name == "obj"


def test_unknown_name_raises() -> None:
    method = _method(("obj", OBJECT_TYPE, False))

    with pytest.raises(BindingError):
        bind_argument(Argument(position=0, name="missing"), method)


def test_too_many_positional_arguments_raises() -> None:
    method = _method(("obj", OBJECT_TYPE, False))

    with pytest.raises(BindingError):
        bind_argument(Argument(position=1, name=None), method)


def test_params_parameter_absorbs_trailing_arguments() -> None:
    method = _method(("format", _STRING, False), ("args", _OBJECT_ARRAY, True))
    arguments = _arguments(None, None, None, None)

    assert [bind_argument(argument, method).name for argument in arguments] == [
        "format",
        "args",
        "args",
        "args",
    ]


@pytest.mark.parametrize(
    ("parameter", "expected"),
    [
        (ParameterSymbol("o", OBJECT_TYPE, 0), True),
        (ParameterSymbol("s", _STRING, 0), False),
        (ParameterSymbol("args", _OBJECT_ARRAY, 0, is_params=True), True),
        (ParameterSymbol("args", _STRING_ARRAY, 0, is_params=True), False),
        (ParameterSymbol("arr", _OBJECT_ARRAY, 0), False),
        (ParameterSymbol("t", TypeRef(namespace="", name="T"), 0), False),
        (ParameterSymbol("f", TypeRef(namespace="System", name="IFormattable"), 0), False),
    ],
)
def test_is_object_bound(parameter: ParameterSymbol, expected: bool) -> None:
    assert is_object_bound(parameter) is expected


def test_effective_type_of_params_is_element_type() -> None:
    parameter = ParameterSymbol("args", _STRING_ARRAY, 1, is_params=True)

    assert effective_type(parameter) == _STRING


def test_object_bound_positions_keeps_source_order() -> None:
    method = _method(("a", OBJECT_TYPE, False), ("b", _STRING, False), ("c", OBJECT_TYPE, False))
    arguments = _arguments(None, None, "c")

    assert object_bound_positions(arguments, (0, 1, 2), method) == (0, 2)


def test_object_bound_positions_fails_whole_call() -> None:
    method = _method(("a", OBJECT_TYPE, False))
    arguments = _arguments(None, "nope")

    with pytest.raises(BindingError):
        object_bound_positions(arguments, (0,), method)
